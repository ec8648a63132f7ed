from typing import Sequence

from .models import (
    FRAUD_DATA_KEY,
    A2UIResponse,
    BeginRendering,
    ColumnComponent,
    ComponentDescriptor,
    DataModelEntry,
    DataModelUpdate,
    GraphEdge,
    GraphNode,
    KnowledgeGraphComponent,
    SurfaceUpdate,
)

ROOT_COMPONENT_ID = "root"
GRAPH_COMPONENT_ID = "fraud-graph"
GRAPH_LAYOUT = "cose"

VIEWPORT_WIDTH_PX = 800
VIEWPORT_HEIGHT_PX = 600


def build_components(title: str) -> list[ComponentDescriptor]:
    """
    Build the component tree for a fraud graph surface.

    A root Column holding a single KnowledgeGraph view that reads its nodes and
    edges from `/fraudData`.
    """
    return [
        ColumnComponent(id=ROOT_COMPONENT_ID, children=[GRAPH_COMPONENT_ID]),
        KnowledgeGraphComponent(
            id=GRAPH_COMPONENT_ID,
            title=title,
            layout=GRAPH_LAYOUT,
            dataPath="/" + FRAUD_DATA_KEY,
        ),
    ]


def assemble_response(
    surface_id: str,
    root_id: str,
    components: Sequence[ComponentDescriptor],
    dataset: Sequence[GraphNode | GraphEdge],
) -> A2UIResponse:
    """
    Assemble the surface, data model and rendering messages for one surface.

    Parameters
    ----------
    surface_id : str
        The surface all three messages target.
    root_id : str
        Id of the top-level component to render.
    components : Sequence[ComponentDescriptor]
        The component tree.
    dataset : Sequence[GraphNode | GraphEdge]
        Graph records, stored under the `fraudData` key in render order.

    Returns
    -------
    response : A2UIResponse
    """
    return A2UIResponse(
        surfaceUpdate=SurfaceUpdate(surfaceId=surface_id, components=list(components)),
        dataModelUpdate=DataModelUpdate(
            surfaceId=surface_id,
            contents=[DataModelEntry(key=FRAUD_DATA_KEY, valueArray=list(dataset))],
        ),
        beginRendering=BeginRendering(
            root=root_id,
            surfaceId=surface_id,
            viewportWidthPx=VIEWPORT_WIDTH_PX,
            viewportHeightPx=VIEWPORT_HEIGHT_PX,
        ),
    )
