"""Shared fixtures: moto-mocked DynamoDB table and S3 bucket."""

import boto3
import pytest
from moto import mock_aws

REGION = "us-east-1"
TABLE = "thumbnails"
IMAGE_BUCKET = "imgs"


@pytest.fixture
def aws_credentials(monkeypatch):
    """Fake credentials so boto3 never reaches for real ones."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", REGION)


@pytest.fixture
def mocked_aws(aws_credentials):
    with mock_aws():
        yield


@pytest.fixture
def dynamodb_client(mocked_aws):
    """DynamoDB client with an empty thumbnails table keyed by Index."""
    client = boto3.client("dynamodb", region_name=REGION)
    client.create_table(
        TableName=TABLE,
        KeySchema=[{"AttributeName": "Index", "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": "Index", "AttributeType": "S"}],
        BillingMode="PAY_PER_REQUEST",
    )
    return client


@pytest.fixture
def s3_client(mocked_aws):
    """S3 client with an empty source image bucket."""
    client = boto3.client("s3", region_name=REGION)
    client.create_bucket(Bucket=IMAGE_BUCKET)
    return client
