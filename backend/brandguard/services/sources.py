"""
Document sources and layer mutators.

The engine never talks to a host application. Callers pick a
DocumentSnapshotProvider (live payload or fixture) and, for fixes, a
LayerMutator that applies remediation actions.
"""
from typing import Dict, List, Optional, Protocol, Set

import structlog

from brandguard.exceptions import ExtractionError, MutationError
from brandguard.models import Bounds, DocumentSnapshot, LayerSnapshot

logger = structlog.get_logger()

SOURCE_LIVE = "live"
SOURCE_FIXTURE = "fixture"


class DocumentSnapshotProvider(Protocol):
    def get_snapshot(self) -> DocumentSnapshot:
        """Return the current document snapshot or raise ExtractionError."""
        ...


class LayerMutator(Protocol):
    def set_fill_color(self, layer_id: str, color: str) -> None: ...

    def set_stroke_color(self, layer_id: str, color: str) -> None: ...

    def set_text_color(self, layer_id: str, color: str) -> None: ...

    def set_font_family(self, layer_id: str, font_family: str) -> None: ...

    def set_bounds(self, layer_id: str, bounds: Bounds) -> None: ...


class StaticSnapshotProvider:
    """Serves a snapshot supplied by the caller (the live host payload)."""

    def __init__(self, snapshot: Optional[DocumentSnapshot]):
        self.snapshot = snapshot

    def get_snapshot(self) -> DocumentSnapshot:
        if self.snapshot is None:
            raise ExtractionError("No document snapshot was supplied")
        return self.snapshot


class FixtureSnapshotProvider:
    """Deterministic demo document with one violation in every category."""

    def get_snapshot(self) -> DocumentSnapshot:
        return DocumentSnapshot(
            width=1920,
            height=1080,
            layers=[
                LayerSnapshot(
                    id="layer1", name="Background", type="generic",
                    bounds=Bounds(x=0, y=0, width=1920, height=1080),
                    fill="#FF0000"
                ),
                LayerSnapshot(
                    id="text1", name="Heading", type="text",
                    bounds=Bounds(x=400, y=420, width=1120, height=120),
                    text_color="#000000", font_family="Comic Sans MS"
                ),
                LayerSnapshot(
                    id="text2", name="Body Copy", type="text",
                    bounds=Bounds(x=400, y=580, width=1120, height=200),
                    text_color="#666666", font_family="Roboto"
                ),
                LayerSnapshot(
                    id="logo1", name="Logo", type="generic",
                    bounds=Bounds(x=10, y=10, width=50, height=30),
                    fill="#0066CC"
                ),
            ]
        )


def get_snapshot_provider(
    source: str,
    snapshot: Optional[DocumentSnapshot] = None
) -> DocumentSnapshotProvider:
    """Select a provider explicitly by name."""
    if source == SOURCE_LIVE:
        return StaticSnapshotProvider(snapshot)
    if source == SOURCE_FIXTURE:
        return FixtureSnapshotProvider()
    raise ValueError(f"Unknown snapshot source: {source}. Use '{SOURCE_LIVE}' or '{SOURCE_FIXTURE}'")


class InMemoryLayerMutator:
    """
    Applies mutations to an in-memory copy of a snapshot.
    Layers listed in failing_layers reject every mutation with MutationError.
    """

    def __init__(self, snapshot: DocumentSnapshot, failing_layers: Optional[Set[str]] = None):
        self.width = snapshot.width
        self.height = snapshot.height
        self.order: List[str] = [layer.id for layer in snapshot.layers]
        self.layers: Dict[str, LayerSnapshot] = {layer.id: layer for layer in snapshot.layers}
        self.failing_layers = set(failing_layers or ())
        self.applied: List[str] = []

    def _update(self, layer_id: str, require_text: bool = False, **changes) -> None:
        layer = self.layers.get(layer_id)
        if layer is None:
            raise MutationError(f"Layer {layer_id} not found", {"layer_id": layer_id})
        if layer_id in self.failing_layers:
            raise MutationError(f"Layer {layer_id} rejected the change", {"layer_id": layer_id})
        if require_text and not layer.is_text:
            raise MutationError(f"Layer {layer_id} is not a text layer", {"layer_id": layer_id})

        self.layers[layer_id] = layer.model_copy(update=changes)
        self.applied.append(f"{layer_id}:{','.join(changes)}")
        logger.debug("layer_mutated", layer_id=layer_id, changes=list(changes))

    def set_fill_color(self, layer_id: str, color: str) -> None:
        self._update(layer_id, fill=color)

    def set_stroke_color(self, layer_id: str, color: str) -> None:
        self._update(layer_id, stroke=color)

    def set_text_color(self, layer_id: str, color: str) -> None:
        self._update(layer_id, require_text=True, text_color=color)

    def set_font_family(self, layer_id: str, font_family: str) -> None:
        self._update(layer_id, require_text=True, font_family=font_family)

    def set_bounds(self, layer_id: str, bounds: Bounds) -> None:
        self._update(layer_id, bounds=bounds)

    def snapshot(self) -> DocumentSnapshot:
        """The document as it stands after all applied mutations."""
        return DocumentSnapshot(
            width=self.width,
            height=self.height,
            layers=[self.layers[layer_id] for layer_id in self.order]
        )
