import pytest
from sqlalchemy import text
from sqlalchemy.dialects import mysql, postgresql, sqlite

from sqlalchemy_facil.helpers.utils import count_placeholders, to_named_binds


class TestCountPlaceholders:
    def test_plain(self):
        assert count_placeholders("select * from book where id = ? and author = ?") == 2

    def test_none(self):
        assert count_placeholders("select count(*) from book") == 0

    def test_ignores_literals_and_comments(self):
        sql = """
            select 'why?', "odd?column" -- trailing ?
            from book /* block ? comment */
            where title = 'it''s ?' and id = ?
        """
        assert count_placeholders(sql) == 1

    def test_unterminated_literal(self):
        assert count_placeholders("select ? from book where title = 'abc?") == 1

    def test_backslash_escaped_quote(self):
        sql = r"select * from t where a = 'it\'s ?' and b = ?"
        assert count_placeholders(sql, backslash_escapes=True) == 1

    def test_backslash_is_literal_by_default(self):
        sql = r"select * from t where path = 'C:\' and b = ?"
        assert count_placeholders(sql) == 1

    def test_backtick_identifier(self):
        assert count_placeholders("select `why?` from t where id = ?") == 1

    def test_dollar_quoted_strings(self):
        sql = "select $$what?$$, $fn$ a ? b $fn$ from t where id = ?"
        assert count_placeholders(sql) == 1

    def test_dollar_number_is_not_a_quote(self):
        assert count_placeholders("select $1, ? from t where x = ?") == 2


class TestNamedBinds:
    SQL = "select * from book where title like 'A%' and id = ? and author = ?"

    def test_rewrite(self):
        assert to_named_binds(self.SQL) == (
            "select * from book where title like 'A%' and id = :p0 and author = :p1"
        )

    def test_literal_question_mark_untouched(self):
        sql = "update book set title = 'Why?' where id = ?"
        assert to_named_binds(sql) == "update book set title = 'Why?' where id = :p0"

    def test_cast_after_placeholder(self):
        assert to_named_binds("select ?::int") == "select (:p0)::int"

    @pytest.mark.parametrize("dialect, expected", [
        (sqlite.dialect(), "select * from book where title like 'A%' and id = ? and author = ?"),
        (postgresql.psycopg2.dialect(), "select * from book where title like 'A%%' and id = %(p0)s and author = %(p1)s"),
        (mysql.pymysql.dialect(), "select * from book where title like 'A%%' and id = %s and author = %s"),
    ])
    def test_rendered_by_dialect(self, dialect, expected):
        compiled = text(to_named_binds(self.SQL)).compile(dialect=dialect)

        assert str(compiled) == expected

    def test_colon_in_literal_is_not_a_bind(self):
        compiled = text(to_named_binds("select ':name', ? from t")).compile(dialect=sqlite.dialect())

        assert str(compiled) == "select ':name', ? from t"
        assert set(compiled.params) == {"p0"}

    def test_caller_named_bind_stays_literal(self):
        compiled = text(to_named_binds("select * from t where a = :p0 and b = ?")).compile(dialect=sqlite.dialect())

        assert str(compiled) == "select * from t where a = :p0 and b = ?"
        assert set(compiled.params) == {"p0"}
