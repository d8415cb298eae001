"""
session.py
==========
Store stage of the viewer: the per-user analysis state machine.

    idle ──select──▶ has-image ──begin──▶ analyzing ──complete──▶ has-result
                         ▲                    │                       │
                         └──────fail──────────┘                       │
                         ▲                                            │
                         └────────────select (new image)──────────────┘

Only one analysis can be in flight; selecting an image while analyzing is
refused.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from viewer.image_loader import EncodedImage
from viewer.proxy_client import Analysis, AnalysisRequestError

logger = logging.getLogger(__name__)


class Phase(str, enum.Enum):
    IDLE       = "idle"
    HAS_IMAGE  = "has-image"
    ANALYZING  = "analyzing"
    HAS_RESULT = "has-result"


class SessionStateError(RuntimeError):
    """An action was attempted from a phase that does not allow it."""


@dataclass
class AnalysisSession:
    image: Optional[EncodedImage] = None
    analysis: Optional[Analysis] = None
    phase: Phase = Phase.IDLE

    @property
    def can_analyze(self) -> bool:
        return self.image is not None and self.phase in (Phase.HAS_IMAGE, Phase.HAS_RESULT)

    def select_image(self, image: EncodedImage) -> None:
        if self.phase is Phase.ANALYZING:
            raise SessionStateError("Cannot change the image while an analysis is running")
        self.image    = image
        self.analysis = None
        self.phase    = Phase.HAS_IMAGE

    def begin_analysis(self) -> EncodedImage:
        if not self.can_analyze:
            raise SessionStateError(f"Cannot start an analysis from phase '{self.phase.value}'")
        self.analysis = None
        self.phase    = Phase.ANALYZING
        return self.image  # type: ignore[return-value]

    def complete(self, analysis: Analysis) -> None:
        if self.phase is not Phase.ANALYZING:
            raise SessionStateError("No analysis is running")
        self.analysis = analysis
        self.phase    = Phase.HAS_RESULT

    def fail(self) -> None:
        if self.phase is not Phase.ANALYZING:
            raise SessionStateError("No analysis is running")
        self.phase = Phase.HAS_IMAGE

    def run(self, analyze: Callable[[str], Analysis]) -> Analysis:
        """
        Drive one full analysis with *analyze* (typically ProxyClient.analyze).

        On any failure the session returns to has-image and the error is
        re-raised for the caller to report.
        """
        image = self.begin_analysis()
        try:
            analysis = analyze(image.data_uri)
        except AnalysisRequestError:
            logger.warning("Analysis of %s failed; returning to has-image.", image.filename)
            self.fail()
            raise
        except Exception:
            logger.error("Unexpected error analysing %s.", image.filename, exc_info=True)
            self.fail()
            raise
        self.complete(analysis)
        return analysis
