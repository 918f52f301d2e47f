import pytest

from goose.database.querier import Querier, QueryController


class RecordingQuerier(Querier):
    def create_table(self, table_name):
        return f"create:{table_name}"

    def insert_version(self, table_name):
        return f"insert:{table_name}"

    def delete_version(self, table_name):
        return f"delete:{table_name}"

    def get_migration_by_version(self, table_name):
        return f"get:{table_name}"

    def list_migrations(self, table_name):
        return f"list:{table_name}"

    def get_latest_version(self, table_name):
        return f"latest:{table_name}"


class ExtendedQuerier(RecordingQuerier):
    def table_exists(self, table_name):
        return f"exists:{table_name}"


@pytest.mark.parametrize(
    ("method", "prefix"),
    [
        ("create_table", "create"),
        ("insert_version", "insert"),
        ("delete_version", "delete"),
        ("get_migration_by_version", "get"),
        ("list_migrations", "list"),
        ("get_latest_version", "latest"),
    ],
)
def test_controller_delegates(method, prefix):
    controller = QueryController(RecordingQuerier())
    assert getattr(controller, method)("versions") == f"{prefix}:versions"


def test_table_exists_missing_returns_empty():
    controller = QueryController(RecordingQuerier())
    assert controller.table_exists("versions") == ""


def test_table_exists_present_is_used():
    controller = QueryController(ExtendedQuerier())
    assert controller.table_exists("versions") == "exists:versions"


def test_duck_typed_querier_is_accepted():
    class Plain:
        def create_table(self, table_name):
            return table_name.upper()

    controller = QueryController(Plain())
    assert controller.create_table("tbl") == "TBL"
    assert controller.table_exists("tbl") == ""


def test_incomplete_querier_cannot_back_a_controller():
    class Partial(Querier):
        def create_table(self, table_name):
            return ""

    with pytest.raises(TypeError):
        QueryController(Partial())