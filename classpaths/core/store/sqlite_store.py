"""
SQLite classpath storage implementation.

Provides persistent storage for classpaths, their favorites, resource
bindings and collection rules in a single SQLite database.
"""
import sqlite3
import threading
from pathlib import Path
from typing import Optional, Union, List, Sequence, Iterable, Tuple, Any
from contextlib import contextmanager

from .protocols import PathStore, ResourceLinker
from .models import ClasspathRecord
from ..config import MEMORY_DB
from ..exceptions import ConflictError, DependencyError, StorageError, ValidationError
from ..logging import get_logger

logger = get_logger(__name__)


class SQLiteStore(PathStore, ResourceLinker):
    """
    SQLite-based classpath storage.

    Thread-safe: one connection guarded by a lock. Single statements run
    in autocommit mode; multi-statement work goes through transaction().

    Example:
        >>> store = SQLiteStore("classpath.db")
        >>> cid = store.insert(ClasspathRecord(path="infra"))
        >>> store.find(prefix="infra")
    """

    SCHEMA_VERSION = 1

    def __init__(self, db_path: Union[str, Path] = MEMORY_DB):
        """
        Initialize SQLite storage.

        Args:
            db_path: Database file path, or ':memory:'
        """
        self._lock = threading.Lock()
        self._conn: Optional[sqlite3.Connection] = None

        if str(db_path) == MEMORY_DB:
            self._path = MEMORY_DB
        else:
            self._path = Path(db_path)
            self._path.parent.mkdir(parents=True, exist_ok=True)

        self._init_db()

    @property
    def path(self) -> Union[str, Path]:
        """Get database path."""
        return self._path

    @contextmanager
    def _get_connection(self):
        """Get thread-safe database connection."""
        with self._lock:
            if self._conn is None:
                self._conn = sqlite3.connect(
                    str(self._path),
                    check_same_thread=False,
                    isolation_level=None
                )
                self._conn.row_factory = sqlite3.Row
            yield self._conn

    @contextmanager
    def transaction(self):
        """Run statements atomically; roll back on any exception."""
        with self._get_connection() as conn:
            conn.execute('BEGIN IMMEDIATE')
            try:
                yield conn
                conn.execute('COMMIT')
            except BaseException:
                # a failed COMMIT can leave the transaction open
                if conn.in_transaction:
                    conn.execute('ROLLBACK')
                raise

    @contextmanager
    def _guard(self, operation: str, *args: Any):
        """Log sqlite failures once and surface them as StorageError."""
        try:
            yield
        except sqlite3.IntegrityError as e:
            if 'classpath.path' in str(e):
                raise ConflictError(f"Classpath {args[0] if args else ''} already exists") from e
            logger.error("sqlite.error: %s%r fail: %s", operation, args, e)
            raise StorageError() from e
        except sqlite3.Error as e:
            logger.error("sqlite.error: %s%r fail: %s", operation, args, e)
            raise StorageError() from e

    def _init_db(self) -> None:
        """Initialize database schema."""
        with self._guard('init_db', str(self._path)), self.transaction() as conn:
            conn.execute('''
                CREATE TABLE IF NOT EXISTS version (
                    version INTEGER PRIMARY KEY
                )
            ''')

            conn.execute('''
                CREATE TABLE IF NOT EXISTS classpath (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    path TEXT NOT NULL UNIQUE,
                    note TEXT NOT NULL DEFAULT '',
                    preset INTEGER NOT NULL DEFAULT 0,
                    create_at INTEGER NOT NULL DEFAULT 0,
                    create_by TEXT NOT NULL DEFAULT '',
                    update_at INTEGER NOT NULL DEFAULT 0,
                    update_by TEXT NOT NULL DEFAULT ''
                )
            ''')

            conn.execute('''
                CREATE TABLE IF NOT EXISTS classpath_favorite (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    classpath_id INTEGER NOT NULL,
                    username TEXT NOT NULL,
                    UNIQUE (classpath_id, username)
                )
            ''')

            conn.execute('''
                CREATE TABLE IF NOT EXISTS classpath_resource (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    classpath_id INTEGER NOT NULL,
                    res_ident TEXT NOT NULL,
                    UNIQUE (classpath_id, res_ident)
                )
            ''')

            conn.execute('''
                CREATE TABLE IF NOT EXISTS collect_rule (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    classpath_id INTEGER NOT NULL,
                    type TEXT NOT NULL DEFAULT '',
                    name TEXT NOT NULL DEFAULT ''
                )
            ''')

            row = conn.execute('SELECT version FROM version LIMIT 1').fetchone()
            if row is None:
                conn.execute(
                    'INSERT INTO version (version) VALUES (?)',
                    (self.SCHEMA_VERSION,)
                )

    @staticmethod
    def _where(
        path: Optional[str] = None,
        query: Optional[str] = None,
        prefix: Optional[str] = None
    ) -> Tuple[str, List[Any]]:
        """Build a WHERE clause; matching is literal and case-sensitive."""
        clauses: List[str] = []
        args: List[Any] = []
        if path is not None:
            clauses.append('path = ?')
            args.append(path)
        if query:
            clauses.append('instr(path, ?) > 0')
            args.append(query)
        if prefix is not None:
            clauses.append('substr(path, 1, ?) = ?')
            args.extend([len(prefix), prefix])
        if not clauses:
            return '', args
        return ' WHERE ' + ' AND '.join(clauses), args

    # =========================================================================
    # PathStore
    # =========================================================================

    def insert(self, record: ClasspathRecord) -> int:
        """
        Insert a classpath record.

        Returns:
            The new record id
        """
        columns = [c for c in ClasspathRecord.COLUMNS if c != 'id']
        values = [getattr(record, c) for c in columns]
        sql = 'INSERT INTO classpath ({}) VALUES ({})'.format(
            ', '.join(columns), ', '.join('?' * len(columns))
        )
        with self._guard('insert classpath', record.path), self._get_connection() as conn:
            cursor = conn.execute(sql, values)
            return cursor.lastrowid

    def count(self, path: Optional[str] = None, query: Optional[str] = None) -> int:
        where, args = self._where(path=path, query=query)
        with self._guard('count classpath', path, query), self._get_connection() as conn:
            return conn.execute(f'SELECT COUNT(*) FROM classpath{where}', args).fetchone()[0]

    def find(
        self,
        query: Optional[str] = None,
        prefix: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List[ClasspathRecord]:
        where, args = self._where(query=query, prefix=prefix)
        sql = f'SELECT * FROM classpath{where} ORDER BY path'
        if limit is not None or offset:
            sql += ' LIMIT ? OFFSET ?'
            args.extend([-1 if limit is None else limit, offset])

        with self._guard('query classpath', query, prefix, limit, offset), self._get_connection() as conn:
            rows = conn.execute(sql, args).fetchall()
        return [ClasspathRecord.from_dict(row) for row in rows]

    def get(self, id: Optional[int] = None, path: Optional[str] = None) -> Optional[ClasspathRecord]:
        if id is None and path is None:
            raise ValueError("id or path required")
        if id is not None:
            sql, args = 'SELECT * FROM classpath WHERE id = ?', (id,)
        else:
            sql, args = 'SELECT * FROM classpath WHERE path = ?', (path,)

        with self._guard('get classpath', id, path), self._get_connection() as conn:
            row = conn.execute(sql, args).fetchone()
        if row is None:
            return None
        return ClasspathRecord.from_dict(row)

    def update(self, record: ClasspathRecord, fields: Sequence[str]) -> None:
        for name in fields:
            if name not in ClasspathRecord.UPDATABLE:
                raise ValidationError(f"Classpath field {name} cannot be updated")
        if not fields:
            return

        assignments = ', '.join(f'{name} = ?' for name in fields)
        values = [getattr(record, name) for name in fields]
        with self._guard('update classpath', record.path), self._get_connection() as conn:
            conn.execute(
                f'UPDATE classpath SET {assignments} WHERE id = ?',
                values + [record.id]
            )

    def delete(self, classpath_id: int) -> None:
        """
        Delete a classpath and its favorites atomically.

        Dependencies are counted again inside the transaction, so a resource
        bound after the caller's own check still blocks the delete.
        """
        with self._guard('delete classpath', classpath_id), self.transaction() as conn:
            resources = conn.execute(
                'SELECT COUNT(*) FROM classpath_resource WHERE classpath_id = ?',
                (classpath_id,)
            ).fetchone()[0]
            if resources:
                raise DependencyError(
                    "There are still resources under the classpath",
                    dependency='resources'
                )

            rules = conn.execute(
                'SELECT COUNT(*) FROM collect_rule WHERE classpath_id = ?',
                (classpath_id,)
            ).fetchone()[0]
            if rules:
                raise DependencyError(
                    "There are still collect rules under the classpath",
                    dependency='collect_rules'
                )

            conn.execute('DELETE FROM classpath_favorite WHERE classpath_id = ?', (classpath_id,))
            conn.execute('DELETE FROM classpath WHERE id = ?', (classpath_id,))

    def add_favorite(self, classpath_id: int, username: str) -> None:
        with self._guard('add classpath_favorite', classpath_id, username), self._get_connection() as conn:
            conn.execute(
                'INSERT OR IGNORE INTO classpath_favorite (classpath_id, username) VALUES (?, ?)',
                (classpath_id, username)
            )

    def remove_favorite(self, classpath_id: int, username: str) -> None:
        with self._guard('delete classpath_favorite', classpath_id, username), self._get_connection() as conn:
            conn.execute(
                'DELETE FROM classpath_favorite WHERE classpath_id = ? AND username = ?',
                (classpath_id, username)
            )

    def favorites(self, username: str) -> List[ClasspathRecord]:
        with self._guard('query classpath_favorite', username), self._get_connection() as conn:
            rows = conn.execute('''
                SELECT c.* FROM classpath c
                JOIN classpath_favorite f ON f.classpath_id = c.id
                WHERE f.username = ?
                ORDER BY c.path
            ''', (username,)).fetchall()
        return [ClasspathRecord.from_dict(row) for row in rows]

    # =========================================================================
    # ResourceLinker
    # =========================================================================

    def count_resources(self, classpath_id: int) -> int:
        with self._guard('count classpath_resource', classpath_id), self._get_connection() as conn:
            return conn.execute(
                'SELECT COUNT(*) FROM classpath_resource WHERE classpath_id = ?',
                (classpath_id,)
            ).fetchone()[0]

    def count_collect_rules(self, classpath_id: int) -> int:
        with self._guard('count collect_rule', classpath_id), self._get_connection() as conn:
            return conn.execute(
                'SELECT COUNT(*) FROM collect_rule WHERE classpath_id = ?',
                (classpath_id,)
            ).fetchone()[0]

    def add_collect_rule(self, classpath_id: int, name: str, type: str = '') -> int:
        """Register a collection rule under a classpath."""
        with self._guard('add collect_rule', classpath_id, name), self._get_connection() as conn:
            cursor = conn.execute(
                'INSERT INTO collect_rule (classpath_id, type, name) VALUES (?, ?, ?)',
                (classpath_id, type, name)
            )
            return cursor.lastrowid

    def attach_resource(self, classpath_id: int, ident: str) -> None:
        with self._guard('add classpath_resource', classpath_id, ident), self._get_connection() as conn:
            conn.execute(
                'INSERT OR IGNORE INTO classpath_resource (classpath_id, res_ident) VALUES (?, ?)',
                (classpath_id, ident)
            )

    def detach_resources(self, classpath_id: int, idents: Iterable[str]) -> None:
        idents = list(idents)
        if not idents:
            return

        placeholders = ', '.join('?' * len(idents))
        with self._guard('delete classpath_resource', classpath_id, idents), self._get_connection() as conn:
            conn.execute(
                f'DELETE FROM classpath_resource WHERE classpath_id = ? AND res_ident IN ({placeholders})',
                [classpath_id] + idents
            )

    def resources(self, classpath_id: int) -> List[str]:
        with self._guard('query classpath_resource', classpath_id), self._get_connection() as conn:
            rows = conn.execute(
                'SELECT res_ident FROM classpath_resource WHERE classpath_id = ? ORDER BY res_ident',
                (classpath_id,)
            ).fetchall()
        return [row['res_ident'] for row in rows]

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def close(self) -> None:
        """Close database connection."""
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    def __enter__(self) -> 'SQLiteStore':
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
