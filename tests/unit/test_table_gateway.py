"""
Tests for the TableGateway.

The boto3 table and client are replaced by mocks so the tests check what
the gateway sends and how it reacts to responses and errors.
"""

from unittest.mock import MagicMock, Mock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError, ReadTimeoutError

from team_registry.config import RegistryConfig
from team_registry.core import TableGateway, create_table_gateway
from team_registry.exceptions import ConnectionError, RetryableError, TransactionFailedError


def client_error(code, message="error", **extra):
    response = {'Error': {'Code': code, 'Message': message}}
    response.update(extra)
    return ClientError(response, 'TestOperation')


@pytest.fixture
def config():
    return RegistryConfig(
        aws_access_key_id="test",
        aws_secret_access_key="test",
        region_name="us-east-1",
        environment="test",
        table_prefix="",
        scan_page_size=2
    )


@pytest.fixture
def gateway(config):
    gateway = TableGateway(config, "test_sgune")
    gateway._table = Mock()
    gateway._dynamodb = MagicMock()
    return gateway


class TestFactory:

    def test_create_table_gateway_uses_prefixed_name(self):
        config = RegistryConfig(table_prefix="ops", environment="dev")

        gateway = create_table_gateway(config, "sgune")

        assert gateway.table_name == "ops_dev_sgune"
        assert gateway.config is config


class TestGetItem:

    def test_returns_item(self, gateway):
        gateway._table.get_item.return_value = {'Item': {'team_name': 'tool'}}

        assert gateway.get_item({'team_name': 'tool'}) == {'team_name': 'tool'}
        gateway._table.get_item.assert_called_once_with(Key={'team_name': 'tool'}, ConsistentRead=True)

    def test_returns_none_when_missing(self, gateway):
        gateway._table.get_item.return_value = {}

        assert gateway.get_item({'team_name': 'tool'}) is None

    def test_maps_errors(self, gateway):
        gateway._table.get_item.side_effect = client_error('ThrottlingException')

        with pytest.raises(RetryableError):
            gateway.get_item({'team_name': 'tool'})

    def test_connection_failure(self, gateway):
        cause = EndpointConnectionError(endpoint_url="http://127.0.0.1:1")
        gateway._table.get_item.side_effect = cause

        with pytest.raises(ConnectionError) as exc_info:
            gateway.get_item({'team_name': 'tool'})

        assert exc_info.value.original_error is cause
        assert 'tool' in str(exc_info.value)


class TestScan:

    def test_scan_all_follows_pages(self, gateway):
        gateway._table.scan.side_effect = [
            {'Items': [{'team_name': 'a'}, {'team_name': 'b'}], 'LastEvaluatedKey': {'team_name': 'b'}},
            {'Items': [], 'LastEvaluatedKey': {'team_name': 'c'}},
            {'Items': [{'team_name': 'd'}]},
        ]

        items = gateway.scan_all(ProjectionExpression='#f0', ExpressionAttributeNames={'#f0': 'team_name'})

        assert [item['team_name'] for item in items] == ['a', 'b', 'd']
        calls = gateway._table.scan.call_args_list
        assert len(calls) == 3
        assert 'ExclusiveStartKey' not in calls[0].kwargs
        assert calls[1].kwargs['ExclusiveStartKey'] == {'team_name': 'b'}
        assert calls[2].kwargs['ExclusiveStartKey'] == {'team_name': 'c'}
        assert all(call.kwargs['Limit'] == 2 for call in calls)

    def test_scan_all_empty_table(self, gateway):
        gateway._table.scan.return_value = {'Items': []}

        assert gateway.scan_all(ProjectionExpression='#f0', ExpressionAttributeNames={'#f0': 'team_name'}) == []

    def test_scan_missing_table(self, gateway):
        gateway._table.scan.side_effect = client_error('ResourceNotFoundException', 'Requested resource not found')

        with pytest.raises(ConnectionError, match="Table not found"):
            gateway.scan_all(ProjectionExpression='#f0', ExpressionAttributeNames={'#f0': 'team_name'})

    def test_scan_read_timeout(self, gateway):
        gateway._table.scan.side_effect = ReadTimeoutError(endpoint_url="http://127.0.0.1:1")

        with pytest.raises(ConnectionError, match="Scan on test_sgune failed"):
            gateway.scan_all(ProjectionExpression='#f0', ExpressionAttributeNames={'#f0': 'team_name'})


class TestTransactions:

    def test_transact_put_structure(self, gateway):
        client = gateway._dynamodb.meta.client

        gateway.transact_put(
            {'team_name': 'tool', 'dns_records': [], 'health_checks': []},
            condition_expression='attribute_not_exists(#pk)',
            expression_attribute_names={'#pk': 'team_name'},
            resource_id='tool'
        )

        client.transact_write_items.assert_called_once_with(TransactItems=[{
            'Put': {
                'TableName': 'test_sgune',
                'Item': {'team_name': 'tool', 'dns_records': [], 'health_checks': []},
                'ConditionExpression': 'attribute_not_exists(#pk)',
                'ExpressionAttributeNames': {'#pk': 'team_name'}
            }
        }])

    def test_transact_put_without_condition(self, gateway):
        client = gateway._dynamodb.meta.client

        gateway.transact_put({'team_name': 'tool'})

        put = client.transact_write_items.call_args.kwargs['TransactItems'][0]['Put']
        assert 'ConditionExpression' not in put
        assert 'ExpressionAttributeNames' not in put

    def test_cancelled_transaction(self, gateway):
        gateway._dynamodb.meta.client.transact_write_items.side_effect = client_error(
            'TransactionCanceledException',
            'Transaction cancelled, please refer cancellation reasons for specific reasons [ConditionalCheckFailed]'
        )

        with pytest.raises(TransactionFailedError) as exc_info:
            gateway.transact_put({'team_name': 'tool'}, resource_id='tool')

        assert exc_info.value.condition_failed is True
        assert exc_info.value.resource_id == 'tool'

    def test_other_errors_become_transaction_failures(self, gateway):
        gateway._dynamodb.meta.client.transact_write_items.side_effect = client_error('ProvisionedThroughputExceededException')

        with pytest.raises(TransactionFailedError) as exc_info:
            gateway.transact_put({'team_name': 'tool'}, resource_id='tool')

        assert exc_info.value.condition_failed is False
        assert isinstance(exc_info.value.original_error, RetryableError)

    def test_connection_failure_becomes_transaction_failure(self, gateway):
        cause = EndpointConnectionError(endpoint_url="http://127.0.0.1:1")
        gateway._dynamodb.meta.client.transact_write_items.side_effect = cause

        with pytest.raises(TransactionFailedError) as exc_info:
            gateway.transact_put({'team_name': 'tool'}, resource_id='tool')

        assert exc_info.value.condition_failed is False
        assert exc_info.value.cancellation_reasons == []
        assert exc_info.value.resource_id == 'tool'
        assert exc_info.value.original_error is cause


class TestLazyResource:

    def test_resource_uses_config(self, config, monkeypatch):
        session = MagicMock()
        session_class = Mock(return_value=session)
        monkeypatch.setattr('team_registry.core.table_gateway.boto3.Session', session_class)

        gateway = TableGateway(config, "test_sgune")
        table = gateway.table

        session_class.assert_called_once_with(
            aws_access_key_id="test",
            aws_secret_access_key="test",
            aws_session_token=config.aws_session_token,
            region_name="us-east-1"
        )
        args, kwargs = session.resource.call_args
        assert args == ('dynamodb',)
        assert kwargs['region_name'] == "us-east-1"
        assert 'endpoint_url' not in kwargs or kwargs['endpoint_url'] == config.endpoint_url
        session.resource.return_value.Table.assert_called_once_with("test_sgune")
        assert table is gateway.table

    def test_resource_failure(self, config, monkeypatch):
        monkeypatch.setattr(
            'team_registry.core.table_gateway.boto3.Session',
            Mock(side_effect=RuntimeError("no session"))
        )

        with pytest.raises(ConnectionError, match="Failed to connect to DynamoDB"):
            TableGateway(config, "test_sgune").table
