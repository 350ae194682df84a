from sqlalchemy.dialects import mssql, postgresql

from weekplan.modules.shopping import services
from weekplan.modules.shopping.models import ShoppingListItem


def _Compile(query, dialect):
    return str(query.statement.compile(dialect=dialect))


def test_bucket_read_takes_update_lock_on_sql_server(db):
    sql = _Compile(services._LockedBucketQuery(db, 1, 45, 2024, True), mssql.dialect())
    assert "WITH (UPDLOCK, ROWLOCK)" in sql
    assert "FOR UPDATE" not in sql


def test_item_read_takes_update_lock_on_sql_server(db):
    query = services._ForUpdate(db.query(ShoppingListItem).filter(ShoppingListItem.Id == 5))
    assert "WITH (UPDLOCK, ROWLOCK)" in _Compile(query, mssql.dialect())


def test_bucket_read_uses_for_update_elsewhere(db):
    sql = _Compile(services._LockedBucketQuery(db, 1, 45, 2024, False), postgresql.dialect())
    assert "FOR UPDATE" in sql
    assert "UPDLOCK" not in sql
