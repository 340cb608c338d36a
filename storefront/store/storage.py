"""Key-value blob storage the cart is mirrored to.

Every backend stores opaque strings under string keys and reports any
failure as :class:`StorageError`.
"""
from __future__ import annotations

import contextlib
import os
from pathlib import Path
from typing import Protocol

from sqlalchemy import Column, String, Text, create_engine, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from storefront.config import Settings


class StorageError(Exception):
    pass


class CorruptBlobError(StorageError):
    pass


class KeyValueStorage(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStorage:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data = dict[str, str](initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class FileStorage:
    """One file per key inside ``directory``."""

    def __init__(self, directory: str | os.PathLike[str]) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as exc:
            raise CorruptBlobError(f"{path} is not valid UTF-8: {exc}") from exc
        except OSError as exc:
            raise StorageError(f"failed to read {path}: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp = path.with_name(path.name + ".tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp.write_text(value, encoding="utf-8")
            os.replace(tmp, path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise StorageError(f"failed to write {path}: {exc}") from exc

    def remove(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise StorageError(f"failed to remove {path}: {exc}") from exc


Base = declarative_base()


class BlobOrm(Base):
    __tablename__ = "kv_blobs"
    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)


class SqlStorage:
    def __init__(self, database_url: str) -> None:
        self.engine = create_engine(database_url, future=True)
        self.SessionLocal = sessionmaker(bind=self.engine, expire_on_commit=False, future=True)
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as exc:
            raise StorageError(f"failed to create blob table: {exc}") from exc

    def get(self, key: str) -> str | None:
        try:
            with self.SessionLocal() as session:
                orm = session.get(BlobOrm, key)
                return None if orm is None else orm.value
        except SQLAlchemyError as exc:
            raise StorageError(f"failed to read {key!r}: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        try:
            with self.SessionLocal.begin() as session:
                orm = session.get(BlobOrm, key)
                if orm is None:
                    session.add(BlobOrm(key=key, value=value))
                else:
                    orm.value = value
        except SQLAlchemyError as exc:
            raise StorageError(f"failed to write {key!r}: {exc}") from exc

    def remove(self, key: str) -> None:
        try:
            with self.SessionLocal.begin() as session:
                session.execute(delete(BlobOrm).where(BlobOrm.key == key))
        except SQLAlchemyError as exc:
            raise StorageError(f"failed to remove {key!r}: {exc}") from exc


def build_storage(settings: Settings) -> KeyValueStorage:
    if settings.storage_backend == "memory":
        return MemoryStorage()
    if settings.storage_backend == "sql":
        return SqlStorage(settings.database_url)
    return FileStorage(settings.storage_dir)
