import logging
import threading
import uuid

logger = logging.getLogger("mcp_fraud_detection")

SURFACE_ID_PREFIX = "fraud-detection-"


def generate_surface_id(username: str) -> str:
    "Build a fresh surface id: fraud-detection-<username>-<8 hex chars>."
    return f"{SURFACE_ID_PREFIX}{username}-{uuid.uuid4().hex[:8]}"


class SurfaceRegistry:
    """Maps usernames to the rendering surface their graph was last shown on.

    Entries live as long as the registry. All access goes through one lock so
    the registry can be shared between concurrent tool calls.
    """

    def __init__(self) -> None:
        self._surfaces: dict[str, str] = {}
        self._lock = threading.Lock()

    def register(self, username: str) -> str:
        "Mint a new surface id for the user, replacing any previous one."
        surface_id = generate_surface_id(username)
        with self._lock:
            previous = self._surfaces.get(username)
            self._surfaces[username] = surface_id
        if previous is not None:
            logger.debug(f"Replaced surface {previous} for user {username}")
        return surface_id

    def get_or_create(self, username: str) -> str:
        """Return the user's surface id, creating one if none exists.

        For callers that need a stable surface across calls: the first writer
        wins. `FraudDetectionService.show_transaction` uses `register` instead,
        which opens a new surface every time.
        """
        with self._lock:
            surface_id = self._surfaces.get(username)
            if surface_id is None:
                surface_id = generate_surface_id(username)
                self._surfaces[username] = surface_id
        return surface_id

    def lookup(self, username: str) -> str | None:
        with self._lock:
            return self._surfaces.get(username)

    def __contains__(self, username: object) -> bool:
        with self._lock:
            return username in self._surfaces

    def __len__(self) -> int:
        with self._lock:
            return len(self._surfaces)
