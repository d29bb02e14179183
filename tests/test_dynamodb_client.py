import pytest
from botocore.exceptions import ClientError

from app.infrastructure.persistence.dynamodb.dynamodb_client import DynamoDBStorageClient


class FakeTable:
    def __init__(self, pages=None, error=None):
        self.calls = []
        self.pages = list(pages or [])
        self.error = error

    def put_item(self, **kwargs):
        self.calls.append(("put_item", kwargs))
        return {"ResponseMetadata": {"HTTPStatusCode": 200}}

    def update_item(self, **kwargs):
        self.calls.append(("update_item", kwargs))
        attrs = dict(kwargs["Key"])
        for placeholder, attr in kwargs["ExpressionAttributeNames"].items():
            attrs[attr] = kwargs["ExpressionAttributeValues"][placeholder.replace("#f", ":v")]
        return {"Attributes": attrs}

    def delete_item(self, **kwargs):
        self.calls.append(("delete_item", kwargs))
        return {"ResponseMetadata": {"HTTPStatusCode": 200}}

    def query(self, **kwargs):
        self.calls.append(("query", kwargs))
        if self.error:
            raise self.error
        return self.pages.pop(0)


class FakeResource:
    def __init__(self, table):
        self.table = table
        self.names = []

    def Table(self, name):
        self.names.append(name)
        return self.table


def test_put_passes_item_to_named_table():
    table = FakeTable()
    resource = FakeResource(table)
    client = DynamoDBStorageClient(resource)
    out = client.put("appointments", {"PK": "p", "SK": "s"})
    assert out["ResponseMetadata"]["HTTPStatusCode"] == 200
    assert resource.names == ["appointments"]
    assert table.calls == [("put_item", {"Item": {"PK": "p", "SK": "s"}})]


def test_update_builds_set_expression_with_placeholders():
    table = FakeTable()
    client = DynamoDBStorageClient(FakeResource(table))
    key = {"PK": "p", "SK": "s"}
    out = client.update("appointments", key, {"status": "PENDING", "location": "Main St"})

    _, kwargs = table.calls[0]
    assert kwargs["UpdateExpression"] == "SET #f0 = :v0, #f1 = :v1"
    assert kwargs["ExpressionAttributeNames"] == {"#f0": "status", "#f1": "location"}
    assert kwargs["ExpressionAttributeValues"] == {":v0": "PENDING", ":v1": "Main St"}
    assert kwargs["ReturnValues"] == "ALL_NEW"
    assert out == {"PK": "p", "SK": "s", "status": "PENDING", "location": "Main St"}


def test_update_requires_fields():
    client = DynamoDBStorageClient(FakeResource(FakeTable()))
    with pytest.raises(ValueError):
        client.update("appointments", {"PK": "p", "SK": "s"}, {})


def test_delete_by_key():
    table = FakeTable()
    client = DynamoDBStorageClient(FakeResource(table))
    client.delete("appointments", {"PK": "p", "SK": "s"})
    assert table.calls == [("delete_item", {"Key": {"PK": "p", "SK": "s"}})]


def test_query_follows_pagination():
    table = FakeTable(pages=[
        {"Items": [{"SK": "APPOINTMENT#1"}], "LastEvaluatedKey": {"PK": "x"}},
        {"Items": [{"SK": "APPOINTMENT#2"}]},
    ])
    client = DynamoDBStorageClient(FakeResource(table))
    out = client.query("appointments", "DateIndex", "TENANT#t1#DATE#2024-01-01")

    assert out == [{"SK": "APPOINTMENT#1"}, {"SK": "APPOINTMENT#2"}]
    first, second = table.calls[0][1], table.calls[1][1]
    assert first["IndexName"] == "DateIndex"
    assert "ExclusiveStartKey" not in first
    assert second["ExclusiveStartKey"] == {"PK": "x"}


def test_query_unknown_index():
    client = DynamoDBStorageClient(FakeResource(FakeTable()))
    with pytest.raises(ValueError):
        client.query("appointments", "NoSuchIndex", "x")


def test_query_client_error_propagates():
    error = ClientError({"Error": {"Code": "ProvisionedThroughputExceededException", "Message": "slow down"}}, "Query")
    client = DynamoDBStorageClient(FakeResource(FakeTable(error=error)))
    with pytest.raises(ClientError):
        client.query("appointments", "DateIndex", "x")
