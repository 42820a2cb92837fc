import pytest

from sqlalchemy import create_engine

from sqlalchemy_facil import FacilDB

from models import PUBLISHER_DDL, BOOK_DDL, PUBLISHERS, BOOKS


@pytest.fixture
def engine():
    engine = create_engine("sqlite://")
    yield engine
    engine.dispose()

@pytest.fixture
def db(engine):
    db = FacilDB(engine)
    db.sql(PUBLISHER_DDL).execute()
    db.sql(BOOK_DDL).execute()

    yield db

    db.close_connection()

@pytest.fixture
def bookstore(db):
    for row in PUBLISHERS:
        db.insert("publisher").fields("id, pub_name").params(*row).execute()

    for row in BOOKS:
        (
            db.insert("book")
            .fields("id, title, author, isbn, publisher_id")
            .params(*row)
            .execute()
        )

    return db
