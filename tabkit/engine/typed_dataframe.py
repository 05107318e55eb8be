from typing import ClassVar, TypeVar, get_args, get_origin

import wrapt

T = TypeVar("T")


class ColBase[T]:
    """Typed column descriptor."""

    # set by TypedDataFrameBase.__init_subclass__ from the annotation name
    name: str = ""
    python_type: type[T]

    def __init__(self, python_type: type[T]):
        self.python_type = python_type

    def __set_name__(self, owner, name: str):
        self.name = name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, {self.python_type!r})"


class TypedDataFrameBase(wrapt.ObjectProxy):
    """
    Base class for typed frame schemas.
    Proxies every attribute to the wrapped frame, so an instance can be used
    wherever the underlying frame is expected.

    Subclasses created with ``abstract=True`` only bind a frame flavour
    (``DataFrameModel``); concrete subclasses declare columns as ``Col[...]``
    annotations and get a validation schema class built from them.
    """

    DataFrameModel: ClassVar[type]
    _schema_class: ClassVar[type]
    _columns: ClassVar[dict[str, type]]

    def __init__(self, df):
        super().__init__(df)

    def __init_subclass__(cls, abstract: bool = False, **kwargs):
        super().__init_subclass__(**kwargs)

        if abstract:
            return

        columns: dict[str, type] = {}

        # walk from the most basic class to the most derived one so that
        # redeclared columns take the derived type
        for base in reversed(cls.__mro__):
            if base in (object, wrapt.ObjectProxy, TypedDataFrameBase):
                continue

            own_annotations = getattr(base, "__annotations__", {})
            if not isinstance(own_annotations, dict):
                continue

            for attr_name, annotation in own_annotations.items():
                attr_class = get_origin(annotation)
                if (
                    attr_class is not None
                    and isinstance(attr_class, type)
                    and issubclass(attr_class, ColBase)
                ):
                    col_type = get_args(annotation)[0]
                    col = attr_class(col_type)
                    col.name = attr_name
                    columns[attr_name] = col_type
                    setattr(cls, attr_name, col)

        cls._columns = columns
        cls._schema_class = type(
            f"{cls.__name__}Schema",
            (cls.DataFrameModel,),
            {"__annotations__": columns},
        )

    @classmethod
    def column_names(cls) -> list[str]:
        """Declared column names in declaration order."""
        return list(cls._columns)
