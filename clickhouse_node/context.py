# clickhouse_node/context.py
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Sequence
from clickhouse_node.description import default_parameters
from clickhouse_node.errors import CredentialError


class ExecutionContext(ABC):
    """What the host hands the node for one invocation"""

    @abstractmethod
    def get_credentials(self, name: str) -> Mapping[str, Any]:
        """Get the stored credential record registered under `name`"""

    @abstractmethod
    def get_node_parameter(self, name: str, default: Any = None) -> Any:
        """Get a resolved node parameter"""

    @abstractmethod
    def get_input_data(self) -> List[Dict[str, Any]]:
        """Get the JSON payload of every upstream item"""

    @abstractmethod
    def emit(self, items: Sequence[Dict[str, Any]]) -> None:
        """Pass output items downstream"""


class LocalExecutionContext(ExecutionContext):
    """In-process host used by the CLI runner and the tests"""

    def __init__(self, credentials: Mapping[str, Mapping[str, Any]],
                 parameters: Optional[Mapping[str, Any]] = None,
                 items: Optional[Sequence[Mapping[str, Any]]] = None):
        self.credentials = dict(credentials)
        self.parameters = default_parameters()
        self.parameters.update(parameters or {})
        self.items = [dict(item) for item in (items or [])]
        self.output = []

    def get_credentials(self, name: str) -> Mapping[str, Any]:
        if name not in self.credentials:
            raise CredentialError(f"No credentials named '{name}' are configured")
        return self.credentials[name]

    def get_node_parameter(self, name: str, default: Any = None) -> Any:
        value = self.parameters.get(name)
        return default if value is None else value

    def get_input_data(self) -> List[Dict[str, Any]]:
        return [dict(item) for item in self.items]

    def emit(self, items: Sequence[Dict[str, Any]]) -> None:
        self.output.extend(items)
