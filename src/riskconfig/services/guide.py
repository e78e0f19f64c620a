"""Risk assessment guide and the placeholder assessment.

There is no scoring engine. ``build_example_assessment`` returns the same
canned result for every input so API consumers can integrate against the
response shape.
"""

import copy
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

DEFAULT_GUIDE_PATH = Path(__file__).resolve().parent.parent / "docs" / "CONFIG_RISK_ASSESSMENT_GUIDE.md"
DEFAULT_GUIDE_TITLE = "AI-Powered Configuration Risk Assessment Guide"

_EXAMPLE_ASSESSMENT: dict[str, Any] = {
    "overallRiskLevel": "MEDIUM",
    "riskScore": 5.5,
    "confidence": 0.8,
    "summary": (
        "Example assessment. The proposed configuration loosens exposure "
        "limits while keeping alerting enabled."
    ),
    "findings": [
        {
            "category": "exposure",
            "severity": "MEDIUM",
            "description": "Maximum exposure increased relative to the current configuration.",
        },
        {
            "category": "thresholds",
            "severity": "LOW",
            "description": "Alert thresholds tightened; expect more frequent notifications.",
        },
    ],
    "recommendations": [
        "Roll out to a single portfolio before applying fleet-wide.",
        "Review VaR and expected shortfall limits after one reporting cycle.",
    ],
}


@dataclass
class GuideDocument:
    """The markdown guide as served to clients."""
    title: str
    content: str
    last_modified: datetime
    content_type: str = "markdown"

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "content": self.content,
            "contentType": self.content_type,
            "lastModified": self.last_modified.isoformat(),
        }


def load_guide(
    path: str | Path = DEFAULT_GUIDE_PATH,
    title: str = DEFAULT_GUIDE_TITLE,
) -> Optional[GuideDocument]:
    """Read the guide from disk.

    Args:
        path: Markdown file to serve.
        title: Title reported alongside the content.

    Returns:
        The guide, or None if the file does not exist.
    """
    path = Path(path).expanduser()
    if not path.is_file():
        logger.warning(f"Risk assessment guide not found at {path}")
        return None

    content = path.read_text(encoding="utf-8")
    mtime = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)
    return GuideDocument(title=title, content=content, last_modified=mtime)


def build_example_assessment(config: dict[str, Any]) -> dict[str, Any]:
    """Return the canned assessment. ``config`` is not inspected."""
    return copy.deepcopy(_EXAMPLE_ASSESSMENT)
