from typing import Self, TypeVar

from pandera.api.polars.model import DataFrameModel
from pandera.errors import SchemaError

import polars as pl

from ..typed_dataframe import ColBase, TypedDataFrameBase

T = TypeVar("T")


class Col[T](ColBase):
    """Polars column descriptor."""

    def __get__(self, obj, objtype=None) -> pl.Expr:
        """Return a Polars column expression, for instance and class access alike."""
        return pl.col(self.name)


class TypedLazyFrame(TypedDataFrameBase, abstract=True):
    """
    Base class for typed polars LazyFrame.
    Wraps pl.LazyFrame for full Polars functionality.
    """

    DataFrameModel = DataFrameModel
    SchemaError = SchemaError

    @classmethod
    def from_df(cls, df: pl.LazyFrame | pl.DataFrame, validate: bool = True) -> Self:
        """Create typed frame from a frame whose schema matches the Col definitions."""
        if validate:
            # eager frames get data-level checks (nullability) as well
            cls._schema_class.validate(df)
        if isinstance(df, pl.DataFrame):
            df = df.lazy()
        return cls(df)

    @classmethod
    def from_dicts(cls, dicts: list[dict], schema) -> Self:
        return cls.from_df(pl.from_dicts(dicts, schema).lazy())
