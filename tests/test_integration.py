"""
集成测试
"""
import json
import logging
from datetime import timedelta

import boto3
import pytest
from moto import mock_aws
from typer.testing import CliRunner

from pkcs12_expiry_monitor.cli import app
from pkcs12_expiry_monitor.models import MonitorConfig, UrgencyState
from pkcs12_expiry_monitor.monitor import CertificateExpiryMonitor

TEST_PASSPHRASE = "s3cret"


@pytest.fixture(autouse=True)
def fresh_log_handlers(frozen_now):
    logger = logging.getLogger("pkcs12_expiry_monitor")
    logger.handlers.clear()
    yield
    logger.handlers.clear()


def create_subscribed_queue(region_name: str = 'us-east-1'):
    """创建SNS主题并订阅一个SQS队列，用于读取已发布的告警"""
    sns = boto3.client('sns', region_name=region_name)
    sqs = boto3.client('sqs', region_name=region_name)

    topic_arn = sns.create_topic(Name='cert-alerts')['TopicArn']
    queue_url = sqs.create_queue(QueueName='cert-alerts-inbox')['QueueUrl']
    queue_arn = sqs.get_queue_attributes(
        QueueUrl=queue_url, AttributeNames=['QueueArn']
    )['Attributes']['QueueArn']
    sns.subscribe(TopicArn=topic_arn, Protocol='sqs', Endpoint=queue_arn)

    return topic_arn, sqs, queue_url


def receive_notifications(sqs, queue_url):
    response = sqs.receive_message(QueueUrl=queue_url, MaxNumberOfMessages=10)
    return [json.loads(message['Body']) for message in response.get('Messages', [])]


class TestCertificateExpiryMonitorIntegration:
    """证书过期监控器集成测试"""

    @mock_aws
    def test_end_to_end_expiring_certificate_publishes_alert(self, aws_credentials, make_archive, utc_now):
        """测试端到端工作流 - 即将过期的证书发送告警"""
        topic_arn, sqs, queue_url = create_subscribed_queue()
        archive = make_archive(utc_now + timedelta(days=3))

        config = MonitorConfig(
            archive_path=archive,
            passphrase=TEST_PASSPHRASE,
            sns_topic_arn=topic_arn,
            timezone_name="UTC"
        )
        result = CertificateExpiryMonitor(config).execute()

        assert result.classification.state is UrgencyState.EXPIRES_SOON
        assert result.notification_sent is True

        notifications = receive_notifications(sqs, queue_url)
        assert len(notifications) == 1
        assert notifications[0]['Subject'] == "Certificate expires in 3 days: cert.p12"
        assert notifications[0]['Message'] == result.message

    @mock_aws
    def test_end_to_end_healthy_certificate_is_silent(self, aws_credentials, make_archive, utc_now):
        """测试端到端工作流 - 健康证书不发送告警"""
        topic_arn, sqs, queue_url = create_subscribed_queue()
        archive = make_archive(utc_now + timedelta(days=200))

        config = MonitorConfig(
            archive_path=archive,
            passphrase=TEST_PASSPHRASE,
            quiet=True,
            sns_topic_arn=topic_arn,
            timezone_name="UTC"
        )
        result = CertificateExpiryMonitor(config).execute()

        assert result.classification.state is UrgencyState.HEALTHY
        assert result.message is None
        assert result.notification_sent is False
        assert receive_notifications(sqs, queue_url) == []

    @mock_aws
    def test_cli_with_sns_topic_from_environment(self, aws_credentials, make_archive, utc_now, monkeypatch):
        """测试命令行从环境变量读取SNS主题"""
        topic_arn, sqs, queue_url = create_subscribed_queue()
        monkeypatch.setenv('SNS_TOPIC_ARN', topic_arn)
        archive = make_archive(utc_now - timedelta(days=1))

        result = CliRunner().invoke(app, ["-q", "--timezone", "UTC", archive, TEST_PASSPHRASE])

        assert result.exit_code == 0
        assert f"Certificate {archive} *EXPIRED* at" in result.stdout

        notifications = receive_notifications(sqs, queue_url)
        assert len(notifications) == 1
        assert notifications[0]['Subject'] == "Certificate expired: cert.p12"

    @mock_aws
    def test_missing_topic_does_not_change_exit_status(self, aws_credentials, make_archive, utc_now):
        """测试告警发送失败不影响退出码"""
        archive = make_archive(utc_now - timedelta(days=1))
        missing_topic = "arn:aws:sns:us-east-1:123456789012:does-not-exist"

        result = CliRunner().invoke(
            app, ["--sns-topic-arn", missing_topic, "--timezone", "UTC", archive, TEST_PASSPHRASE]
        )

        assert result.exit_code == 0
        assert f"Certificate {archive} *EXPIRED* at" in result.stdout
