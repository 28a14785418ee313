import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

DEFAULT_SESSION_FILE = Path.home() / ".sweetshop" / "session.json"

class SessionStore:
    """
    Keeps the access token and the signed-in user between CLI invocations.
    """

    def __init__(self, path: Optional[Path] = None):
        env_path = os.getenv("SWEETSHOP_SESSION_FILE")
        self.path = Path(path or env_path or DEFAULT_SESSION_FILE)

    def load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            return {}
        return data if isinstance(data, dict) else {}

    @property
    def token(self) -> Optional[str]:
        return self.load().get("token")

    @property
    def user(self) -> Optional[Dict[str, Any]]:
        return self.load().get("user")

    def save(self, token: str, user: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({"token": token, "user": user}, f)

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
