"""
Shared fixtures for ZipPrompt tests
"""

import io
import os
import zipfile
from typing import Dict, Optional, Union

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from zipprompt.db.database import get_db
from zipprompt.main import app
from zipprompt.models import Base
from zipprompt.services.archive import ArchiveEntry


def make_zip(files: Dict[str, Optional[Union[str, bytes]]]) -> bytes:
    """
    Build a zip archive in memory.

    Keys are entry paths in archive order; a value of None writes a
    directory entry (the path should end with '/').
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        for path, content in files.items():
            if content is None:
                zf.writestr(zipfile.ZipInfo(path), b"")
            else:
                zf.writestr(path, content)
    return buffer.getvalue()


def make_symlink_zip(link_path: str, target: str, files: Dict[str, str]) -> bytes:
    """A zip whose first entry is a Unix symlink, followed by regular files"""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        info = zipfile.ZipInfo(link_path)
        info.external_attr = 0o120777 << 16
        zf.writestr(info, target)
        for path, content in files.items():
            zf.writestr(path, content)
    return buffer.getvalue()


def make_entry(path: str, content: Union[str, bytes] = b"", is_dir: bool = False) -> ArchiveEntry:
    """An in-memory ArchiveEntry that does not need a real zip"""
    data = content.encode("utf-8") if isinstance(content, str) else content
    return ArchiveEntry(path=path, is_dir=is_dir, size=len(data), reader=lambda: data)


@pytest.fixture
def sample_zip() -> bytes:
    return make_zip({
        "proj/src/a.py": "print(1)\n",
        "proj/src/b.txt": "",
        "proj/node_modules/x.js": "module.exports = 1;\n",
    })


@pytest_asyncio.fixture
async def db_session_maker():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def client(db_session_maker):
    async def override_get_db():
        async with db_session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
