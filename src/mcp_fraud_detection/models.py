from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, model_validator

FRAUD_DATA_KEY = "fraudData"


def _value_string(key: str, value: str) -> dict[str, str]:
    "Helper function to build a single A2UI key/valueString pair."
    return {"key": key, "valueString": value}


class GraphNode(BaseModel):
    """A node of a simulated transaction network.

    Example:
    {
        "recordKey": "0",
        "entityId": "bob_acc",
        "label": "Bob's Account"
    }
    """

    kind: Literal["node"] = "node"
    recordKey: str = Field(
        description="Key of the record within its dataset. A small integer as a string.",
        min_length=1,
    )
    entityId: str = Field(
        description="Identifier of the entity, referenced by edges.", min_length=1
    )
    label: str = Field(
        description="Display label. May contain a line break before a risk annotation."
    )

    def to_a2ui(self) -> dict[str, Any]:
        "Convert the node to an A2UI data model entry."
        return {
            "key": self.recordKey,
            "valueMap": [
                _value_string("id", self.entityId),
                _value_string("label", self.label),
            ],
        }


class GraphEdge(BaseModel):
    """A directed edge between two nodes of a simulated transaction network.

    Example:
    {
        "recordKey": "3",
        "sourceId": "bob_acc",
        "targetId": "vpn_node",
        "label": "connects"
    }
    """

    kind: Literal["edge"] = "edge"
    recordKey: str = Field(
        description="Key of the record within its dataset. A small integer as a string.",
        min_length=1,
    )
    sourceId: str = Field(description="Entity id of the source node.", min_length=1)
    targetId: str = Field(description="Entity id of the target node.", min_length=1)
    label: str = Field(description="Display label of the edge.")

    def to_a2ui(self) -> dict[str, Any]:
        "Convert the edge to an A2UI data model entry."
        return {
            "key": self.recordKey,
            "valueMap": [
                _value_string("source", self.sourceId),
                _value_string("target", self.targetId),
                _value_string("label", self.label),
            ],
        }


GraphRecord = Annotated[Union[GraphNode, GraphEdge], Field(discriminator="kind")]


class ColumnComponent(BaseModel):
    "A container component laying out its children vertically."

    kind: Literal["Column"] = "Column"
    id: str = Field(min_length=1)
    children: list[str] = Field(
        default_factory=list, description="Ids of the child components, in order."
    )

    def to_a2ui(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "component": {
                self.kind: {"children": {"explicitList": list(self.children)}}
            },
        }


class KnowledgeGraphComponent(BaseModel):
    "A graph view bound to a path of the surface's data model."

    kind: Literal["KnowledgeGraph"] = "KnowledgeGraph"
    id: str = Field(min_length=1)
    title: str
    layout: str = Field(default="cose", description="Graph layout algorithm.")
    dataPath: str = Field(
        default="/" + FRAUD_DATA_KEY,
        description="Data model path holding the graph records.",
    )

    def to_a2ui(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "component": {
                self.kind: {
                    "title": self.title,
                    "layout": self.layout,
                    "data": {"path": self.dataPath},
                }
            },
        }


ComponentDescriptor = Annotated[
    Union[ColumnComponent, KnowledgeGraphComponent], Field(discriminator="kind")
]


class SurfaceUpdate(BaseModel):
    surfaceId: str
    components: list[ComponentDescriptor]

    def to_a2ui(self) -> dict[str, Any]:
        return {
            "surfaceId": self.surfaceId,
            "components": [c.to_a2ui() for c in self.components],
        }


class DataModelEntry(BaseModel):
    key: str
    valueArray: list[GraphRecord]

    def to_a2ui(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "valueArray": [record.to_a2ui() for record in self.valueArray],
        }


class DataModelUpdate(BaseModel):
    surfaceId: str
    contents: list[DataModelEntry]

    def to_a2ui(self) -> dict[str, Any]:
        return {
            "surfaceId": self.surfaceId,
            "contents": [entry.to_a2ui() for entry in self.contents],
        }


class BeginRendering(BaseModel):
    root: str
    surfaceId: str
    viewportWidthPx: int
    viewportHeightPx: int

    def to_a2ui(self) -> dict[str, Any]:
        return self.model_dump()


class A2UIResponse(BaseModel):
    """The three A2UI messages for one surface, merged into a single object.

    The rendering layer reads `surfaceUpdate`, `dataModelUpdate` and
    `beginRendering` as separate messages.
    """

    surfaceUpdate: SurfaceUpdate
    dataModelUpdate: DataModelUpdate
    beginRendering: BeginRendering

    @model_validator(mode="after")
    def validate_surface(self) -> "A2UIResponse":
        "Validate that all messages target one surface and that the root component exists."
        surface_ids = {
            self.surfaceUpdate.surfaceId,
            self.dataModelUpdate.surfaceId,
            self.beginRendering.surfaceId,
        }
        if len(surface_ids) != 1:
            raise ValueError(f"Messages target different surfaces: {sorted(surface_ids)}")

        component_ids = [c.id for c in self.surfaceUpdate.components]
        if self.beginRendering.root not in component_ids:
            raise ValueError(
                f"Root component {self.beginRendering.root} not found in components: {component_ids}"
            )
        return self

    @property
    def surface_id(self) -> str:
        return self.beginRendering.surfaceId

    def to_a2ui(self) -> dict[str, Any]:
        "Convert the response to the merged A2UI map consumed by the rendering layer."
        return {
            "surfaceUpdate": self.surfaceUpdate.to_a2ui(),
            "dataModelUpdate": self.dataModelUpdate.to_a2ui(),
            "beginRendering": self.beginRendering.to_a2ui(),
        }


class ErrorResponse(BaseModel):
    "Returned in place of an A2UIResponse when an action cannot be rendered."

    error: str

    def to_a2ui(self) -> dict[str, Any]:
        return {"error": self.error}
