from typing import Any, Dict, List, Protocol


class StorageClient(Protocol):
    """Minimal key-value engine surface used by the record store.

    Table and index names are opaque values handed through from configuration.
    """

    def put(self, table_name: str, item: Dict[str, Any]) -> Dict[str, Any]:
        ...

    def update(self, table_name: str, key: Dict[str, str], patch: Dict[str, Any]) -> Dict[str, Any]:
        ...

    def delete(self, table_name: str, key: Dict[str, str]) -> Dict[str, Any]:
        ...

    def query(self, table_name: str, index_name: str, partition_value: str) -> List[Dict[str, Any]]:
        ...
