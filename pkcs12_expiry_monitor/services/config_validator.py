"""
配置验证服务
"""
import os
import re
from typing import Dict, Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import logging

from ..models import MonitorConfig
from .error_handler import ConfigurationError

SNS_ARN_PATTERN = r'^arn:aws(-[a-z]+)*:sns:[a-z0-9-]+:\d{12}:[a-zA-Z0-9_-]+(\.fifo)?$'

VALID_LOG_LEVELS = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}


class ConfigValidator:
    """配置验证器"""

    def __init__(self):
        """初始化配置验证器"""
        self.logger = logging.getLogger(__name__)

    def validate_config(self, config: MonitorConfig) -> Dict[str, Any]:
        """
        验证运行配置

        Args:
            config: 运行配置

        Returns:
            Dict[str, Any]: 验证结果
        """
        validation_result = {
            'is_valid': True,
            'errors': [],
            'warnings': [],
            'configurations': {}
        }

        checks = {
            'archive': self.validate_archive_configuration(config.archive_path),
            'sns': self.validate_sns_configuration(config.sns_topic_arn),
            'timezone': self.validate_timezone_configuration(config.timezone_name),
            'warning_days': self.validate_warning_days(config.warning_days),
            'log_level': self.validate_log_level(os.getenv('LOG_LEVEL'))
        }

        for name, result in checks.items():
            validation_result['configurations'][name] = result
            if not result['is_valid']:
                validation_result['is_valid'] = False
                validation_result['errors'].extend(result['errors'])
            validation_result['warnings'].extend(result['warnings'])

        for warning in validation_result['warnings']:
            self.logger.warning(warning)

        return validation_result

    def ensure_valid(self, config: MonitorConfig) -> Dict[str, Any]:
        """
        验证运行配置，无效时抛出异常

        Args:
            config: 运行配置

        Returns:
            Dict[str, Any]: 验证结果

        Raises:
            ConfigurationError: 配置无效，携带全部错误信息
        """
        validation_result = self.validate_config(config)
        if not validation_result['is_valid']:
            raise ConfigurationError(validation_result['errors'])
        return validation_result

    def validate_archive_configuration(self, archive_path: str) -> Dict[str, Any]:
        """
        验证归档路径

        文件是否存在、能否读取由证书读取阶段报告。

        Args:
            archive_path: 归档路径

        Returns:
            Dict[str, Any]: 验证结果
        """
        result = {'is_valid': True, 'errors': [], 'warnings': []}

        if not archive_path or not archive_path.strip():
            result['is_valid'] = False
            result['errors'].append("归档路径为空")
        elif not archive_path.lower().endswith(('.p12', '.pfx')):
            result['warnings'].append(f"归档扩展名不是 .p12 或 .pfx: {archive_path}")

        return result

    def validate_sns_configuration(self, topic_arn: Optional[str]) -> Dict[str, Any]:
        """
        验证SNS配置

        Args:
            topic_arn: SNS主题ARN，可为空（不发送告警）

        Returns:
            Dict[str, Any]: SNS配置验证结果
        """
        result = {
            'is_valid': True,
            'errors': [],
            'warnings': [],
            'topic_arn': None,
            'arn_format_valid': False
        }

        if not topic_arn:
            return result

        result['topic_arn'] = topic_arn

        if re.match(SNS_ARN_PATTERN, topic_arn):
            result['arn_format_valid'] = True
        else:
            result['is_valid'] = False
            result['errors'].append(f"SNS主题ARN格式无效: {topic_arn}")

        return result

    def validate_timezone_configuration(self, timezone_name: Optional[str]) -> Dict[str, Any]:
        """
        验证时区名称

        Args:
            timezone_name: IANA时区名称，为空表示使用主机本地时区

        Returns:
            Dict[str, Any]: 验证结果
        """
        result = {'is_valid': True, 'errors': [], 'warnings': []}

        if not timezone_name:
            return result

        try:
            ZoneInfo(timezone_name)
        except (ZoneInfoNotFoundError, ValueError):
            result['is_valid'] = False
            result['errors'].append(f"未知的时区: {timezone_name}")

        return result

    def validate_warning_days(self, warning_days: int) -> Dict[str, Any]:
        """
        验证提前警告天数

        Args:
            warning_days: 提前警告天数

        Returns:
            Dict[str, Any]: 验证结果
        """
        result = {'is_valid': True, 'errors': [], 'warnings': []}

        if warning_days < 2 or warning_days > 365:
            result['is_valid'] = False
            result['errors'].append(f"提前警告天数超出范围(2-365): {warning_days}")
        elif warning_days > 90:
            result['warnings'].append(f"提前警告天数较大: {warning_days}天")

        return result

    def validate_log_level(self, log_level: Optional[str]) -> Dict[str, Any]:
        """
        验证日志级别

        Args:
            log_level: 日志级别，为空时使用默认值

        Returns:
            Dict[str, Any]: 验证结果
        """
        result = {'is_valid': True, 'errors': [], 'warnings': []}

        if log_level and log_level.upper() not in VALID_LOG_LEVELS:
            result['warnings'].append(f"日志级别无效，使用默认值WARNING: {log_level}")

        return result
