import logging

from .assembler import ROOT_COMPONENT_ID, assemble_response, build_components
from .datasets import select_dataset
from .models import A2UIResponse, ErrorResponse
from .surface_registry import SurfaceRegistry

logger = logging.getLogger("mcp_fraud_detection")


class FraudDetectionService:
    """Renders simulated fraud networks onto per-user surfaces.

    `show_transaction` opens a surface for a user; `show_suspected` redraws
    that surface with the flagged part of the network.
    """

    def __init__(self, registry: SurfaceRegistry | None = None) -> None:
        self.registry = registry if registry is not None else SurfaceRegistry()

    def show_transaction(self, username: str) -> A2UIResponse:
        "Show the transaction network for a user on a new surface."
        logger.info(f"Showing transactions for user: {username}")

        surface_id = self.registry.register(username)
        components = build_components(f"Transaction Network for {username}")
        dataset = select_dataset(username, suspected=False)

        return assemble_response(surface_id, ROOT_COMPONENT_ID, components, dataset)

    def show_suspected(self, username: str) -> A2UIResponse | ErrorResponse:
        "Show the suspicious network for a user on the surface opened by `show_transaction`."
        logger.info(f"Showing suspected fraud for user: {username}")

        surface_id = self.registry.lookup(username)
        if surface_id is None:
            logger.warning(f"No active transaction surface found for user: {username}")
            return ErrorResponse(
                error=f"No active transaction surface found for user: {username}. Please call showTransaction first."
            )

        components = build_components(f"FRAUD ALERT - Suspicious Network for {username}")
        dataset = select_dataset(username, suspected=True)

        return assemble_response(surface_id, ROOT_COMPONENT_ID, components, dataset)
