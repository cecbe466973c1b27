"""MarkerMap -- marker character <-> stage mapping.

The marker space is open (any single character is accepted between the
brackets) while the stage space is closed, so the forward direction is a
total, non-injective function with a todo fallback and the reverse direction
yields one canonical marker per stage.
"""

from __future__ import annotations

from .types import Stage


class MarkerMap:
    """Total marker -> stage mapping with a canonical write form per stage."""

    def __init__(
        self,
        forward: dict[Stage, list[str]],
        fallback: Stage = Stage.TODO,
    ) -> None:
        self.forward = forward
        self.fallback = fallback
        self.reverse: dict[str, Stage] = {}
        for stage, markers in forward.items():
            for m in markers:
                self.reverse[m] = stage

    def stage_for(self, marker: str) -> Stage:
        """Stage a marker character maps to; unknown markers fall back."""
        return self.reverse.get(marker, self.fallback)

    def marker_for(self, stage: Stage) -> str:
        """Canonical marker written for a stage."""
        markers = self.forward.get(stage)
        if markers:
            return markers[0]
        raise KeyError(f"no marker for stage {stage.value!r}")

    def preserves(self, marker: str, stage: Stage) -> bool:
        """True when ``marker`` still reads as ``stage`` and can be written as-is."""
        return self.stage_for(marker) == stage

    @staticmethod
    def default_map() -> MarkerMap:
        forward: dict[Stage, list[str]] = {
            Stage.TODO: [" "],
            Stage.IN_PROGRESS: ["/"],
            Stage.DONE: ["x"],
        }
        return MarkerMap(forward)


DEFAULT_MARKERS = MarkerMap.default_map()


def marker_to_stage(marker: str) -> Stage:
    return DEFAULT_MARKERS.stage_for(marker)


def stage_to_marker(stage: Stage) -> str:
    return DEFAULT_MARKERS.marker_for(stage)
