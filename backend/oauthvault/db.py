import os

from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

# Opened in the app lifespan so importing the package never touches the network.
pool = ConnectionPool(
    conninfo="",
    kwargs=dict(
        host=os.getenv("PGHOST", "postgres"),
        dbname=os.getenv("PGDATABASE", "postgres"),
        user=os.getenv("PGUSER", "oauthvault"),
        password=os.getenv("PGPASSWORD"),
        sslmode=os.getenv("PGSSLMODE", "prefer"),
        sslrootcert=os.getenv("PGSSLROOTCERT"),
        sslcert=os.getenv("PGSSLCERT"),
        sslkey=os.getenv("PGSSLKEY"),
        connect_timeout=5,
    ),
    max_size=int(os.getenv("DB_POOL_MAX", "10")),
    timeout=10,
    open=False,
)


def qrow(sql: str, params: tuple | None = None):
    with pool.connection() as conn:
        with conn.cursor(row_factory=dict_row) as cur:
            cur.execute(sql, params or ())
            return cur.fetchone()


def qall(sql: str, params: tuple | None = None) -> list[dict]:
    with pool.connection() as conn:
        with conn.cursor(row_factory=dict_row) as cur:
            cur.execute(sql, params or ())
            return cur.fetchall()


def qrow_commit(sql: str, params: tuple | None = None):
    """Run a write with RETURNING and commit it."""
    with pool.connection() as conn:
        with conn.cursor(row_factory=dict_row) as cur:
            cur.execute(sql, params or ())
            row = cur.fetchone()
            conn.commit()
            return row


def qexec(sql: str, params: tuple | None = None) -> int:
    with pool.connection() as conn:
        with conn.cursor() as cur:
            cur.execute(sql, params or ())
            conn.commit()
            return cur.rowcount
