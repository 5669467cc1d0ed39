"""Maps text chunks onto Slides API batch-update operations."""

from __future__ import annotations

from core.schemas import CreateSlideOp, InsertTextOp, PresentationBatchPlan

# Object id Google assigns to the title placeholder of a new deck's first slide.
DEFAULT_PLACEHOLDER_ID = "i0"
SLIDE_LAYOUT = "TITLE_AND_BODY"


def slide_object_id(index: int) -> str:
    """Object id for the slide holding chunk ``index`` (1-based, > 0)."""
    return f"slide_{index}"


def body_placeholder_id(index: int) -> str:
    """Object id given to the BODY placeholder of slide ``index``."""
    return f"{slide_object_id(index)}_body"


def build_plan(
    chunks: list[str],
    first_placeholder_id: str = DEFAULT_PLACEHOLDER_ID,
) -> PresentationBatchPlan:
    """Build the ordered batch of mutations for a list of chunks.

    The first chunk reuses the slide every new presentation starts with.
    Every further chunk gets its own slide, created right before the text is
    inserted into it. The create-slide request maps the layout's BODY
    placeholder to a known object id, so the insert-text request can target
    it in the same batch.

    Args:
        chunks: Text for each slide, in order
        first_placeholder_id: Placeholder on the default slide for chunk 0

    Returns:
        PresentationBatchPlan with ``len(chunks)`` insert-text operations and
        ``len(chunks) - 1`` create-slide operations
    """
    operations: list[CreateSlideOp | InsertTextOp] = []

    for index, chunk in enumerate(chunks):
        if index == 0:
            target = first_placeholder_id
        else:
            target = body_placeholder_id(index)
            operations.append(
                CreateSlideOp(
                    object_id=slide_object_id(index),
                    insertion_index=index,
                    layout=SLIDE_LAYOUT,
                    placeholder_id=target,
                )
            )
        operations.append(InsertTextOp(object_id=target, text=chunk))

    return PresentationBatchPlan(operations=operations)
