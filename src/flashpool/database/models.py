from sqlalchemy import LargeBinary, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase): ...


class KeyValueTable(Base):
    """
    Contract storage. Each contract owns the rows in its namespace (its address).
    """

    __tablename__ = "key_values"

    namespace: Mapped[str] = mapped_column(String(42), primary_key=True)
    key: Mapped[str] = mapped_column(Text, primary_key=True)
    value: Mapped[bytes] = mapped_column(LargeBinary)
