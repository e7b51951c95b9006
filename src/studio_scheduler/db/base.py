from sqlalchemy.orm import DeclarativeBase, declared_attr


class Base(DeclarativeBase):
    """Declarative base; tables are named after the lower-cased model class."""

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return cls.__name__.lower()
