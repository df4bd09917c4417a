"""
Shared fixtures: test settings, an in-memory Supabase fake, and a TestClient
wired to it through dependency overrides.
"""

import os
import re
from copy import deepcopy
from unittest.mock import MagicMock

import pytest

# Settings are read once (lru_cache), so the environment must be ready
# before anything from academy is imported.
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "anon-test-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "service-test-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "super-secret-jwt-token-for-tests-only")
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_placeholder")
os.environ.setdefault("STRIPE_WEBHOOK_SECRET", "whsec_test_secret")
os.environ.setdefault("CLOUDINARY_CLOUD_NAME", "demo-cloud")
os.environ.setdefault("CLOUDINARY_API_KEY", "123456789")
os.environ.setdefault("CLOUDINARY_API_SECRET", "cloudinary-test-secret")
os.environ.setdefault("EMBEDDING_API_KEY", "gemini-test-key")
os.environ["EMBEDDING_RATE_LIMIT_DELAY"] = "0"

from fastapi.testclient import TestClient  # noqa: E402

from academy.core import dependencies  # noqa: E402
from academy.main import app  # noqa: E402

USER_ID = "11111111-1111-1111-1111-111111111111"
ADMIN_ID = "22222222-2222-2222-2222-222222222222"


# ── Supabase fake ────────────────────────────────────────

def _like_to_regex(pattern: str) -> str:
    """Postgres LIKE semantics: % and _ are wildcards, backslash escapes."""
    parts = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "\\" and i + 1 < len(pattern):
            parts.append(re.escape(pattern[i + 1]))
            i += 2
            continue
        if ch == "%":
            parts.append(".*")
        elif ch == "_":
            parts.append(".")
        else:
            parts.append(re.escape(ch))
        i += 1
    return "^" + "".join(parts) + "$"


class FakeResponse:
    def __init__(self, data=None, count=None):
        self.data = data
        self.count = count


class FakeQuery:
    """Chainable stand-in for the postgrest query builder."""

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.op = "select"
        self.payload = None
        self.on_conflict = ""
        self.count_mode = None
        self.filters = []
        self.filter_log = []
        self.orderings = []
        self.limit_n = None
        self.range_ = None
        self.single_mode = None

    # ── operations
    def select(self, *columns, count=None, **kwargs):
        self.count_mode = count
        return self

    def insert(self, payload):
        self.op, self.payload = "insert", payload
        return self

    def update(self, payload):
        self.op, self.payload = "update", payload
        return self

    def upsert(self, payload, on_conflict="", **kwargs):
        self.op, self.payload, self.on_conflict = "upsert", payload, on_conflict
        return self

    def delete(self):
        self.op = "delete"
        return self

    # ── filters
    def _add(self, name, column, value, predicate):
        self.filter_log.append((name, column, value))
        self.filters.append(predicate)
        return self

    def eq(self, column, value):
        return self._add("eq", column, value, lambda r: r.get(column) == value)

    def neq(self, column, value):
        return self._add("neq", column, value, lambda r: r.get(column) != value)

    def gt(self, column, value):
        return self._add(
            "gt", column, value,
            lambda r: r.get(column) is not None and r.get(column) > value,
        )

    def is_(self, column, value):
        expected = None if value == "null" else value
        return self._add("is", column, value, lambda r: r.get(column) is expected)

    def ilike(self, column, pattern):
        regex = re.compile(_like_to_regex(pattern), re.IGNORECASE)
        return self._add(
            "ilike", column, pattern,
            lambda r: r.get(column) is not None and bool(regex.match(str(r.get(column)))),
        )

    # ── modifiers
    def order(self, column, desc=False, **kwargs):
        self.orderings.append((column, desc))
        return self

    def limit(self, n):
        self.limit_n = n
        return self

    def range(self, start, end):
        self.range_ = (start, end)
        return self

    def single(self):
        self.single_mode = "single"
        return self

    def maybe_single(self):
        self.single_mode = "maybe"
        return self

    def execute(self):
        self.db.calls.append(
            {"table": self.table, "op": self.op, "payload": self.payload, "filters": self.filter_log}
        )
        failure = self.db.failures.get((self.table, self.op))
        if failure is not None:
            raise failure

        rows = self.db.tables.setdefault(self.table, [])
        matched = [r for r in rows if all(f(r) for f in self.filters)]

        if self.op == "insert":
            new_rows = self.payload if isinstance(self.payload, list) else [self.payload]
            rows.extend(deepcopy(new_rows))
            return FakeResponse(deepcopy(new_rows))

        if self.op == "update":
            for r in matched:
                r.update(self.payload)
            return FakeResponse(deepcopy(matched))

        if self.op == "upsert":
            keys = [k.strip() for k in self.on_conflict.split(",") if k.strip()]
            existing = next(
                (r for r in rows if keys and all(r.get(k) == self.payload.get(k) for k in keys)),
                None,
            )
            if existing is not None:
                existing.update(self.payload)
            else:
                rows.append(deepcopy(self.payload))
            return FakeResponse([deepcopy(self.payload)])

        if self.op == "delete":
            for r in matched:
                rows.remove(r)
            return FakeResponse(deepcopy(matched))

        result = deepcopy(matched)
        for column, desc in reversed(self.orderings):
            result.sort(key=lambda r: (r.get(column) is None, r.get(column)), reverse=desc)
        total = len(result)
        if self.range_ is not None:
            result = result[self.range_[0]:self.range_[1] + 1]
        if self.limit_n is not None:
            result = result[:self.limit_n]

        count = total if self.count_mode else None
        if self.single_mode == "maybe":
            if not result:
                return None
            return FakeResponse(result[0], count)
        if self.single_mode == "single":
            if len(result) != 1:
                raise RuntimeError("JSON object requested, multiple (or no) rows returned")
            return FakeResponse(result[0], count)
        return FakeResponse(result, count)


class FakeRpc:
    def __init__(self, db, name, params):
        self.db, self.name, self.params = db, name, params

    def execute(self):
        self.db.rpc_calls.append((self.name, self.params))
        handler = self.db.rpc_handlers.get(self.name)
        if isinstance(handler, Exception):
            raise handler
        data = handler(self.params) if callable(handler) else handler
        return FakeResponse(data)


class FakeAuth:
    def __init__(self):
        self.otp_requests = []
        self.error = None

    def sign_in_with_otp(self, credentials):
        self.otp_requests.append(credentials)
        if self.error is not None:
            raise self.error


class FakeSupabase:
    """In-memory tables plus configurable RPC handlers and failures."""

    def __init__(self):
        self.tables: dict[str, list[dict]] = {}
        self.rpc_handlers: dict = {}
        self.rpc_calls: list = []
        self.failures: dict = {}
        self.calls: list = []
        self.auth = FakeAuth()

    def table(self, name):
        return FakeQuery(self, name)

    def rpc(self, name, params=None):
        return FakeRpc(self, name, params or {})

    def rows(self, table):
        return self.tables.setdefault(table, [])

    def calls_to(self, table, op=None):
        return [c for c in self.calls if c["table"] == table and (op is None or c["op"] == op)]


class FakeEmbeddings:
    """Records embed_query inputs and returns a fixed-size vector."""

    def __init__(self, size=3072, error=None):
        self.size = size
        self.error = error
        self.queries = []

    def embed_query(self, text):
        self.queries.append(text)
        if self.error is not None:
            raise self.error
        return [0.01] * self.size


# ── Fixtures ─────────────────────────────────────────────

@pytest.fixture
def fake_db():
    return FakeSupabase()


@pytest.fixture
def fake_stripe():
    return MagicMock()


@pytest.fixture
def fake_embeddings(monkeypatch):
    from academy.features.embeddings import embedding

    model = FakeEmbeddings()
    monkeypatch.setattr(embedding, "_embeddings_model", model)
    return model


@pytest.fixture
def client(fake_db, fake_stripe):
    """TestClient authenticated as USER_ID against the fakes."""
    app.dependency_overrides[dependencies.get_db] = lambda: fake_db
    app.dependency_overrides[dependencies.get_public_db] = lambda: fake_db
    app.dependency_overrides[dependencies.get_stripe] = lambda: fake_stripe
    app.dependency_overrides[dependencies.get_current_user_id] = lambda: USER_ID
    app.dependency_overrides[dependencies.get_optional_user_id] = lambda: USER_ID
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def anon_client(fake_db, fake_stripe):
    """TestClient with no authenticated user."""
    app.dependency_overrides[dependencies.get_db] = lambda: fake_db
    app.dependency_overrides[dependencies.get_public_db] = lambda: fake_db
    app.dependency_overrides[dependencies.get_stripe] = lambda: fake_stripe
    yield TestClient(app)
    app.dependency_overrides.clear()
