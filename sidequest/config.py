"""
Server Configuration

Loads configuration from environment variables and provides defaults.
Supports loading from .env file using python-dotenv.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from swipe import GestureConfig

# Single .env at the project root for the API and the seeding script
root_env = Path(__file__).resolve().parent.parent / ".env"
if root_env.exists():
    load_dotenv(root_env)


@dataclass
class ServerConfig:
    """Server configuration."""

    # API Keys
    openai_api_key: Optional[str] = None
    gemini_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    llm_provider: str = "openai"

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000

    # Data source: "json" (files under data_dir) | "firebase"
    data_source: str = "json"
    data_dir: Path = Path(__file__).parent.parent / "data"
    # When data_source=firebase: path to service account JSON and optional project id
    firebase_credentials_path: Optional[Path] = None
    firebase_project_id: Optional[str] = None

    # Swipe settings
    swipe_threshold: float = 100.0
    swipe_exit_duration_ms: int = 300
    deck_size: int = 20

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Load configuration from environment variables."""
        base_dir = Path(__file__).parent.parent
        data_source = os.getenv("DATA_SOURCE", "").strip().lower() or "json"
        if data_source not in ("json", "firebase"):
            data_source = "json"

        def _path_env(key: str, default: Optional[Path] = None) -> Optional[Path]:
            v = os.getenv(key)
            if not v:
                return default
            p = Path(v)
            return p if p.is_absolute() else (base_dir / p).resolve()

        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY"),
            gemini_api_key=os.getenv("GEMINI_API_KEY"),
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY"),
            llm_provider=os.getenv("LLM_PROVIDER", "openai").strip().lower() or "openai",
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            data_source=data_source,
            data_dir=_path_env("DATA_DIR", base_dir / "data"),
            firebase_credentials_path=_path_env("FIREBASE_CREDENTIALS_PATH") or _path_env("GOOGLE_APPLICATION_CREDENTIALS"),
            firebase_project_id=os.getenv("FIREBASE_PROJECT_ID") or None,
            swipe_threshold=float(os.getenv("SWIPE_THRESHOLD", "100")),
            swipe_exit_duration_ms=int(os.getenv("SWIPE_EXIT_DURATION_MS", "300")),
            deck_size=int(os.getenv("DECK_SIZE", "20")),
        )

    def validate(self) -> tuple[bool, list[str]]:
        """
        Validate the configuration.

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []

        if self.data_source == "firebase" and not self.firebase_credentials_path:
            errors.append("DATA_SOURCE=firebase requires FIREBASE_CREDENTIALS_PATH")

        if self.deck_size < 1:
            errors.append(f"DECK_SIZE must be positive, got {self.deck_size}")

        try:
            self.gesture_config()
        except ValueError as e:
            errors.append(f"Invalid swipe settings: {e}")

        return len(errors) == 0, errors

    def gesture_config(self) -> GestureConfig:
        """Gesture constants for swipe sessions."""
        return GestureConfig(
            threshold=self.swipe_threshold,
            exit_duration=self.swipe_exit_duration_ms / 1000.0,
        )

    def ensure_directories(self):
        """Create required directories if they don't exist."""
        if self.data_source == "json":
            self.data_dir.mkdir(parents=True, exist_ok=True)


# Global config instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
        _config.ensure_directories()
    return _config


def reload_config() -> ServerConfig:
    """Reload configuration from environment."""
    global _config
    _config = None
    return get_config()
