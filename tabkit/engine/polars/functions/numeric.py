import polars as pl


def to_float(col: pl.Expr) -> pl.Expr:
    """Casts a column to Float64; unparseable values become null."""
    return col.cast(pl.Float64, strict=False)


def convert_columns_to_float(df: pl.LazyFrame, columns: list[str]) -> pl.LazyFrame:
    """Casts the given columns (where present) to Float64 without failing on bad values."""
    existing_columns = set(df.collect_schema().names())
    return df.with_columns(
        to_float(pl.col(col_name)).alias(col_name)
        for col_name in columns
        if col_name in existing_columns
    )


def is_between(col: pl.Expr, low: float, high: float) -> pl.Expr:
    """True when the value lies in the closed range [low, high]; null stays null."""
    return (col >= low) & (col <= high)
