from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy_facil import FacilDB, FacilError, records_to_json
import argparse
import logging
import random
from faker import Faker


random.seed(42)
fake = Faker()

PUBLISHER_DDL = """
create table publisher (
   id bigint not null,
   pub_name varchar(80) not null,
   primary key (id)
)
"""

BOOK_DDL = """
create table book (
   id bigint not null,
   title varchar(80) not null,
   author varchar(50) not null,
   isbn varchar(15) not null,
   publisher_id bigint not null,
   primary key (id),
   foreign key (publisher_id) references publisher(id)
)
"""

def insert_publisher(db, pub_id, pub_name):
    (
        db.insert("publisher")
        .fields("id, pub_name")
        .param(pub_id)
        .param(pub_name)
        .execute()
    )

def insert_book(db, book_id, title, author, isbn, pub_id):
    (
        db.insert("book")
        .fields("id, title, author, isbn, publisher_id")
        .param(book_id)
        .param(title)
        .param(author)
        .param(isbn)
        .param(pub_id)
        .execute()
    )

def generate_books(count, first_id, publisher_ids):
    for idx in range(count):
        yield (
            first_id + idx,
            fake.sentence(nb_words=4).rstrip("."),
            fake.name(),
            fake.isbn10(),
            random.choice(publisher_ids),
        )

def run(db, extra_books):
    db.sql(PUBLISHER_DDL).execute()
    insert_publisher(db, 1000, "Wiley")
    insert_publisher(db, 1001, "Addison-Wesley")
    insert_publisher(db, 1002, "Acme Books")

    db.sql(BOOK_DDL).execute()
    insert_book(db, 2000, "Linux Bible", "Christopher Negus", "978-1119578888", 1000)
    insert_book(db, 2001, "Effective Java 3rd Edition", "Joshua Bloch", "978-0134685991", 1001)
    insert_book(db, 2002, "Refactoring: Improving the Design of Existing Code (2nd Edition)", "Martin Fowler", "978-0134757599", 1001)
    insert_book(db, 2003, "TCP/IP Illustrated, Volume 1: The Protocols", "Kevin Fall and W. Stevens", "978-0321336316", 1001)
    insert_book(db, 2004, "Drawing Cartoons", "John Silver", "965-33245667", 1002)

    for book in generate_books(extra_books, 3000, [1000, 1001, 1002]):
        insert_book(db, *book)

    # Books by publisher, sorted by author
    books = (
        db.select("title, author, isbn")
        .from_("book")
        .where("publisher_id=?")
        .order_by("author")
        .param(1001)
        .query()
    )
    for rec in books:
        print(f"\n>>> {rec['title']}, {rec['isbn']}, {rec['author']}")

    new_title = "Drawing Cartoons the Easy Way"
    (
        db.update("book")
        .fields("title")
        .where("id=?")
        .param(new_title)
        .param(2004)
        .execute()
    )

    rec = (
        db.select("id, title")
        .from_("book")
        .where("id=?")
        .param(2004)
        .query_unique()
    )
    print("\n" + records_to_json(rec, indent=3))

    total = db.sql("select count(*) from book").query_count()
    print(f"\n>> Total Books: {total}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Publisher/book walkthrough of the statement builder")
    parser.add_argument("--url", default="sqlite://", help="SQLAlchemy database URL")
    parser.add_argument("--extra-books", type=int, default=0, help="Number of random books to add")
    parser.add_argument("--verbose", action="store_true", help="Log every executed statement")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    with FacilDB.from_url(args.url) as db:
        try:
            run(db, args.extra_books)
        except (SQLAlchemyError, FacilError) as e:
            logging.getLogger(__name__).exception(f"Example failed: {e}")
            raise SystemExit(1)
