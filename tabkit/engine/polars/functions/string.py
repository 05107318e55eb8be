import polars as pl


def string_to_boolean(col: pl.Expr, true_values: list[str], false_values: list[str]) -> pl.Expr:
    """Converts a string column to boolean based on matching true and false value lists.

    Matching is case-insensitive; values in neither list become null.
    """
    lowered = col.str.to_lowercase()
    return (
        pl.when(lowered.is_in([v.lower() for v in true_values]))
        .then(True)
        .when(lowered.is_in([v.lower() for v in false_values]))
        .then(False)
        .otherwise(None)
    )


def convert_strings_to_boolean(
    df: pl.LazyFrame,
    columns: list[str],
    true_values: list[str],
    false_values: list[str],
) -> pl.LazyFrame:
    """Converts specified columns in the DataFrame from string values to boolean."""
    existing_columns = set(df.collect_schema().names())
    columns_to_convert = [c for c in columns if c in existing_columns]

    return df.with_columns(
        string_to_boolean(pl.col(col_name).cast(pl.String), true_values, false_values).alias(
            col_name
        )
        for col_name in columns_to_convert
    )


def get_string_column_names(df: pl.LazyFrame) -> list[str]:
    """Returns a list of column names with the string data type."""
    return [name for name, dtype in df.collect_schema().items() if dtype == pl.String]


def lowercase_columns(df: pl.LazyFrame) -> pl.LazyFrame:
    """Changes the column names to lowercase format."""
    columns_to_rename = [c for c in df.collect_schema().names() if c != c.lower()]
    return df.rename({c: c.lower() for c in columns_to_rename})


def trim_string_columns(df: pl.LazyFrame) -> pl.LazyFrame:
    """Trims whitespace from all string columns in the DataFrame."""
    string_cols = get_string_column_names(df)
    return df.with_columns(*[pl.col(col_name).str.strip_chars() for col_name in string_cols])


def nullify_string_columns(df: pl.LazyFrame) -> pl.LazyFrame:
    """Replaces empty strings in all string columns with null values."""
    string_cols = get_string_column_names(df)
    return df.with_columns(*[pl.col(col_name).replace("", None) for col_name in string_cols])


def leading_number(col: pl.Expr) -> pl.Expr:
    """
    Extracts the first number in a string as Float64.

    Example:
        "55-59" → 55.0
        "80 or older" → 80.0
        "unknown" → null
    """
    return col.str.extract(r"(\d+(?:\.\d+)?)", 1).cast(pl.Float64, strict=False)
