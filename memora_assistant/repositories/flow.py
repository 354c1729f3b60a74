from abc import ABC, abstractmethod
from typing import Dict, Optional

from ..domain.models import FlowDefinition
from ..data.flow_definitions import HARDCODED_FLOWS


# The Interface
class FlowRepository(ABC):
    """
    Defines how the application accesses FlowDefinitions.
    Lets the registry move (Memory -> Config -> API) without changing the
    processor.
    """

    @abstractmethod
    def get_flow_for_action(self, action: str) -> Optional[FlowDefinition]:
        """
        Retrieves the flow registered for an IntentAction value.
        Returns None when the action has no registered flow.
        """
        pass


class StaticFlowRepository(FlowRepository):
    """
    Get flows from the hardcoded registry in memory.
    """

    def __init__(self, flows: Optional[Dict[str, FlowDefinition]] = None):
        # Index for O(1) lookup
        self._index: Dict[str, FlowDefinition] = dict(
            flows if flows is not None else HARDCODED_FLOWS
        )

    def get_flow_for_action(self, action: str) -> Optional[FlowDefinition]:
        return self._index.get(getattr(action, "value", action))
