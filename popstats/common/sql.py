"""SQL identifier helpers for DuckDB statements built from schema/table names."""


def quote_ident(ident: str) -> str:
    """Double-quote an identifier, escaping embedded quotes."""
    return '"' + ident.replace('"', '""') + '"'


def qualified_table(schema: str, table: str) -> str:
    return f"{quote_ident(schema)}.{quote_ident(table)}"


def select_all(schema: str, table: str) -> str:
    return f"SELECT * FROM {qualified_table(schema, table)}"
