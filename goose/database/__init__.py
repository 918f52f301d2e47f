"""Version-table store and the querier interface it draws its SQL from."""