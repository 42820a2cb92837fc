import re

PLACEHOLDER = "?"

# Dialects whose string literals treat a backslash as an escape character
BACKSLASH_ESCAPE_DIALECTS = ("mysql", "mariadb")

# PostgreSQL dollar quoting: $$ ... $$ or $tag$ ... $tag$
_DOLLAR_QUOTE = re.compile(r"\$(?:[A-Za-z_]\w*)?\$")

# A ":name" that sqlalchemy.text() would take for a bind parameter
_TEXT_BIND = re.compile(r"(?<![:\w\\]):(?=\w+(?![:\w]))")


def _find_quote_end(sql, start, quote, backslash_escapes):
    end = start + 1
    n = len(sql)
    while end < n:
        ch = sql[end]
        if backslash_escapes and ch == "\\" and quote != "`":
            end += 2
            continue
        if ch == quote:
            if end + 1 < n and sql[end + 1] == quote:
                end += 2
                continue
            break
        end += 1
    return min(end + 1, n)


def _iter_segments(sql, backslash_escapes=False):
    """
    Split a SQL string into ``(is_code, text)`` segments.

    Quoted literals ('...'), quoted identifiers ("..." and `...`), dollar
    quoted strings ($$...$$, $tag$...$tag$) and comments (``-- ...`` and
    ``/* ... */``) come back with ``is_code=False`` so that a question mark
    inside them is never taken for a placeholder. A doubled quote is an
    escaped quote; with ``backslash_escapes`` a backslash escapes the next
    character too, as MySQL does by default.
    """
    n = len(sql)
    start = i = 0

    while i < n:
        ch = sql[i]

        if ch in ("'", '"', "`"):
            end = _find_quote_end(sql, i, ch, backslash_escapes)

        elif sql.startswith("--", i):
            end = sql.find("\n", i)
            end = n if end == -1 else end

        elif sql.startswith("/*", i):
            end = sql.find("*/", i + 2)
            end = n if end == -1 else end + 2

        elif ch == "$" and (i == 0 or not (sql[i - 1].isalnum() or sql[i - 1] == "_")):
            match = _DOLLAR_QUOTE.match(sql, i)
            if match is None:
                i += 1
                continue
            tag = match.group(0)
            end = sql.find(tag, match.end())
            end = n if end == -1 else end + len(tag)

        else:
            i += 1
            continue

        if start < i:
            yield True, sql[start:i]
        yield False, sql[i:end]
        start = i = end

    if start < n:
        yield True, sql[start:]


def count_placeholders(sql, backslash_escapes=False):
    return sum(
        segment.count(PLACEHOLDER)
        for is_code, segment in _iter_segments(sql, backslash_escapes)
        if is_code
    )


def bind_name(position):
    return f"p{position}"


def to_named_binds(sql, backslash_escapes=False):
    """
    Rewrite the ``?`` placeholders of ``sql`` into ``:p0``, ``:p1``, ... for
    ``sqlalchemy.text()``, which then renders them in the paramstyle of the
    dialect.

    Colons that ``text()`` would otherwise read as bind parameters (e.g. in
    ``'12:30'``) are escaped so they reach the database unchanged.
    """
    position = 0
    parts = []

    for is_code, segment in _iter_segments(sql, backslash_escapes):
        segment = _TEXT_BIND.sub(r"\\:", segment)

        if is_code and PLACEHOLDER in segment:
            pieces = segment.split(PLACEHOLDER)
            rewritten = [pieces[0]]
            for piece in pieces[1:]:
                bind = f":{bind_name(position)}"
                if piece.startswith(":"):
                    # "?::int" cast; text() cannot tell ":p0::int" apart
                    bind = f"({bind})"
                rewritten.append(bind)
                rewritten.append(piece)
                position += 1
            segment = "".join(rewritten)

        parts.append(segment)

    return "".join(parts)
