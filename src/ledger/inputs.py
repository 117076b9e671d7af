"""Raw inputs, deduplicated by the SHA-256 of their content."""

from typing import TYPE_CHECKING, Any, Optional

from shared_types import EventType, InputState

from .errors import InvalidArgumentError, NotFoundError
from .events import DEFAULT_PAGE_SIZE, EventLog, check_page
from .models import Input, StoreResult, compute_sha256, encode_meta

if TYPE_CHECKING:
    from .store import LedgerStore


def require_id(kind: str, value: Any) -> str:
    if not isinstance(value, str) or not value:
        raise InvalidArgumentError(f"{kind} id must be a non-empty string")
    require_utf8(f"{kind} id", value)
    return value


def require_utf8(label: str, value: str) -> None:
    """Reject strings holding lone surrogates, which cannot be stored or hashed."""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        raise InvalidArgumentError(f"{label} must be valid UTF-8 text")


class InputStore:
    """Owns the inputs table.

    At most one active input exists per content hash; redacted inputs are
    outside that rule, so identical content stored after a redaction becomes
    a new active input.
    """

    def __init__(self, db: "LedgerStore", events: EventLog):
        self.db = db
        self.events = events

    def store(
        self, input_id: str, content: str, meta: Optional[dict[str, Any]] = None
    ) -> StoreResult:
        """Store content, or return the active input that already holds it.

        Returns (input, duplicate). A duplicate performs no write and appends
        no event.
        """
        require_id("Input", input_id)
        if not isinstance(content, str) or not content:
            raise InvalidArgumentError("content must be a non-empty string")
        require_utf8("content", content)
        meta_json = encode_meta(meta)
        sha256 = compute_sha256(content)

        with self.db.transaction():
            existing = self.find_by_sha256(sha256)
            if existing:
                return StoreResult(existing, True)

            now = self.db.now()
            self.db.execute(
                """INSERT INTO inputs
                   (input_id, content, content_sha256, state, created_at, meta_json)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                (input_id, content, sha256, InputState.ACTIVE.value, now, meta_json),
            )
            self.events.append(
                EventType.INPUT_STORED, {"input_id": input_id, "content_sha256": sha256}
            )

        stored = Input(
            input_id=input_id,
            content=content,
            content_sha256=sha256,
            state=InputState.ACTIVE,
            created_at=now,
            meta=dict(meta) if meta is not None else None,
        )
        return StoreResult(stored, False)

    def get_by_id(self, input_id: str) -> Input:
        found = self.find_by_id(input_id)
        if found is None:
            raise NotFoundError("Input", input_id)
        return found

    def find_by_id(self, input_id: str) -> Optional[Input]:
        row = self.db.fetchone("SELECT * FROM inputs WHERE input_id = ?", (input_id,))
        return Input.from_row(row) if row else None

    def find_by_sha256(self, sha256: str) -> Optional[Input]:
        """Active input with this content hash, if any."""
        row = self.db.fetchone(
            "SELECT * FROM inputs WHERE content_sha256 = ? AND state = ?",
            (sha256, InputState.ACTIVE.value),
        )
        return Input.from_row(row) if row else None

    def list(
        self,
        state: Optional[InputState | str] = None,
        limit: int = DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> list[Input]:
        check_page(limit, offset)
        sql = "SELECT * FROM inputs WHERE 1=1"
        params: list = []
        if state:
            try:
                state = InputState(state)
            except ValueError:
                raise InvalidArgumentError(f"Unknown input state: {state}")
            sql += " AND state = ?"
            params.append(state.value)
        sql += " ORDER BY created_at ASC, rowid ASC LIMIT ? OFFSET ?"
        params.extend([limit, offset])
        return [Input.from_row(r) for r in self.db.fetchall(sql, params)]

    def redact(self, input_id: str) -> Input:
        """Null the content and mark the input redacted. Irreversible.

        Redacting an already-redacted input succeeds and appends another
        INPUT_REDACTED event, so every redaction request is on record.
        """
        with self.db.transaction():
            found = self.get_by_id(input_id)
            self.db.execute(
                "UPDATE inputs SET content = NULL, state = ? WHERE input_id = ?",
                (InputState.REDACTED.value, input_id),
            )
            self.events.append(EventType.INPUT_REDACTED, {"input_id": input_id})

        found.content = None
        found.state = InputState.REDACTED
        return found
