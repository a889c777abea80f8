"""
SNS告警服务
"""
import os
from typing import Optional
import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..interfaces import NotificationServiceInterface

# SNS主题长度上限
MAX_SUBJECT_LENGTH = 100


class SNSNotificationService(NotificationServiceInterface):
    """SNS告警服务实现"""

    def __init__(self, topic_arn: Optional[str] = None, region_name: Optional[str] = None):
        """
        初始化SNS告警服务

        Args:
            topic_arn: SNS主题ARN，如果为None则从环境变量读取
            region_name: AWS区域名称，如果为None则自动检测
        """
        self.topic_arn = topic_arn or os.getenv('SNS_TOPIC_ARN')

        # 自动检测区域
        if region_name:
            self.region_name = region_name
        elif self.topic_arn and self.topic_arn.startswith('arn:') and self.topic_arn.count(':') >= 5:
            # 从SNS ARN中提取区域
            self.region_name = self.topic_arn.split(':')[3]
        else:
            self.region_name = os.getenv('AWS_REGION', 'us-east-1')

        self.logger = logging.getLogger(__name__)

        self.sns_client = None
        try:
            self.sns_client = boto3.client('sns', region_name=self.region_name)
            self.logger.debug(f"SNS客户端初始化成功，区域: {self.region_name}")
        except (BotoCoreError, ValueError) as e:
            self.logger.error(f"初始化SNS客户端失败: {str(e)}")

    def send_alert(self, subject: str, message: str) -> bool:
        """
        发送证书过期告警，失败不重试

        Args:
            subject: 告警主题
            message: 告警内容

        Returns:
            bool: 发送是否成功
        """
        if not self._validate_configuration():
            return False

        try:
            response = self.sns_client.publish(
                TopicArn=self.topic_arn,
                Subject=self._truncate_subject(subject),
                Message=message
            )
        except ClientError as e:
            error_code = e.response['Error']['Code']
            error_message = e.response['Error']['Message']
            self.logger.error(f"SNS发送失败 - {error_code}: {error_message}")
            return False
        except BotoCoreError as e:
            self.logger.error(f"发送SNS告警时发生错误: {str(e)}")
            return False

        self.logger.info(f"SNS告警发送成功，MessageId: {response.get('MessageId')}")
        return True

    def _truncate_subject(self, subject: str) -> str:
        # SNS 主题只允许不含换行的ASCII文本
        subject = subject.replace('\n', ' ').encode('ascii', 'replace').decode('ascii')
        if len(subject) <= MAX_SUBJECT_LENGTH:
            return subject
        return subject[:MAX_SUBJECT_LENGTH - 3] + '...'

    def _validate_configuration(self) -> bool:
        """
        验证配置是否正确

        Returns:
            bool: 配置是否有效
        """
        if not self.sns_client:
            self.logger.error("SNS客户端未初始化")
            return False

        if not self.topic_arn:
            self.logger.error("SNS主题ARN未配置")
            return False

        return True

    def get_configuration_status(self) -> dict:
        """
        获取配置状态

        Returns:
            dict: 配置状态信息
        """
        return {
            'sns_client_initialized': self.sns_client is not None,
            'topic_arn_configured': bool(self.topic_arn),
            'region_name': self.region_name,
            'configuration_valid': self._validate_configuration()
        }
