import logging
from typing import Any, Dict, List, Optional

import boto3
from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

from ....application.ports.storage_client import StorageClient
from ....constants import TENANT_DATE_KEY_ATTRIBUTE

logger = logging.getLogger(__name__)

DEFAULT_INDEX_PARTITION_KEYS = {"DateIndex": TENANT_DATE_KEY_ATTRIBUTE}


def create_dynamodb_resource(region_name: str, endpoint_url: Optional[str] = None):
    """Get configured boto3 DynamoDB resource (endpoint_url targets DynamoDB Local)"""
    kwargs: Dict[str, Any] = {"region_name": region_name}
    if endpoint_url:
        kwargs["endpoint_url"] = endpoint_url
    return boto3.resource("dynamodb", **kwargs)


class DynamoDBStorageClient(StorageClient):
    def __init__(self, resource, index_partition_keys: Optional[Dict[str, str]] = None):
        self.resource = resource
        self.index_partition_keys = dict(index_partition_keys or DEFAULT_INDEX_PARTITION_KEYS)

    def _table(self, table_name: str):
        return self.resource.Table(table_name)

    def put(self, table_name: str, item: Dict[str, Any]) -> Dict[str, Any]:
        return self._table(table_name).put_item(Item=item)

    def update(self, table_name: str, key: Dict[str, str], patch: Dict[str, Any]) -> Dict[str, Any]:
        if not patch:
            raise ValueError("update requires at least one attribute")
        names: Dict[str, str] = {}
        values: Dict[str, Any] = {}
        assignments = []
        # Placeholders keep reserved words like "status" and "location" usable
        for i, (attr, value) in enumerate(patch.items()):
            names[f"#f{i}"] = attr
            values[f":v{i}"] = value
            assignments.append(f"#f{i} = :v{i}")
        response = self._table(table_name).update_item(
            Key=key,
            UpdateExpression="SET " + ", ".join(assignments),
            ExpressionAttributeNames=names,
            ExpressionAttributeValues=values,
            ReturnValues="ALL_NEW",
        )
        return response.get("Attributes", {})

    def delete(self, table_name: str, key: Dict[str, str]) -> Dict[str, Any]:
        return self._table(table_name).delete_item(Key=key)

    def query(self, table_name: str, index_name: str, partition_value: str) -> List[Dict[str, Any]]:
        partition_attr = self.index_partition_keys.get(index_name)
        if partition_attr is None:
            raise ValueError(f"Unknown index: {index_name}")
        table = self._table(table_name)
        kwargs: Dict[str, Any] = {
            "IndexName": index_name,
            "KeyConditionExpression": Key(partition_attr).eq(partition_value),
        }
        items: List[Dict[str, Any]] = []
        pages = 0
        try:
            while True:
                response = table.query(**kwargs)
                pages += 1
                items.extend(response.get("Items", []))
                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    break
                kwargs["ExclusiveStartKey"] = last_key
        except ClientError as e:
            logger.error(f"DynamoDB query on {index_name} failed after {pages} page(s): {e}")
            raise
        return items
