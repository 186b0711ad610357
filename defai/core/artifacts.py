"""JSON artifact storage for lookup results"""

import json
from pathlib import Path
from typing import Any, List, Optional

from pydantic import BaseModel

from defai.core.config import settings


def token_artifact_path(ticker: str) -> str:
    """Artifact name for a direct token lookup."""
    return f"crypto_{ticker}.json"


def tweet_artifact_path(post_id: str, ticker: str) -> str:
    """Artifact name for one ticker mentioned in one tweet."""
    return f"tweet_{post_id}_{ticker}.json"


class ArtifactStore:
    """Stores lookup results as JSON files in a flat directory"""

    def __init__(self, artifact_dir: Optional[str] = None):
        self.artifact_dir = Path(artifact_dir or settings.ARTIFACT_DIR)
        self.artifact_dir.mkdir(parents=True, exist_ok=True)

    def _file(self, path: str) -> Path:
        if not path or Path(path).name != path:
            raise ValueError(f"Invalid artifact path: {path!r}")
        return self.artifact_dir / path

    def list_paths(self) -> List[str]:
        """List the names of every stored artifact"""
        return sorted(f.name for f in self.artifact_dir.glob("*.json"))

    def write(self, path: str, content: Any) -> None:
        """Write JSON content, replacing any previous artifact"""
        with open(self._file(path), "w", encoding="utf-8") as f:
            json.dump(content, f, indent=2)

    def write_model(self, path: str, model: BaseModel) -> None:
        self.write(path, model.model_dump(mode="json", by_alias=True))

    def read(self, path: str) -> Optional[Any]:
        """Load an artifact, or None if it does not exist"""
        artifact_file = self._file(path)
        if not artifact_file.exists():
            return None

        with open(artifact_file, "r", encoding="utf-8") as f:
            return json.load(f)
