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

PUBLISHERS = [
    (1000, "Wiley"),
    (1001, "Addison-Wesley"),
    (1002, "Acme Books"),
]

BOOKS = [
    (2000, "Linux Bible", "Christopher Negus", "978-1119578888", 1000),
    (2001, "Effective Java 3rd Edition", "Joshua Bloch", "978-0134685991", 1001),
    (2002, "Refactoring: Improving the Design of Existing Code (2nd Edition)", "Martin Fowler", "978-0134757599", 1001),
    (2003, "TCP/IP Illustrated, Volume 1: The Protocols", "Kevin Fall and W. Stevens", "978-0321336316", 1001),
    (2004, "Drawing Cartoons", "John Silver", "965-33245667", 1002),
]
