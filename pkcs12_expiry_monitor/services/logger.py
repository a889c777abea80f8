"""
日志服务
"""
import os
import logging
import traceback
from datetime import datetime, timezone
from typing import Dict, Any, Optional
from ..interfaces import LoggerServiceInterface
from ..models import ExpiryClassification


class LoggerService(LoggerServiceInterface):
    """日志服务实现"""

    def __init__(self, logger_name: str = "pkcs12_expiry_monitor", log_level: Optional[str] = None):
        """
        初始化日志服务

        Args:
            logger_name: 日志器名称
            log_level: 日志级别，如果为None则从环境变量读取（默认WARNING，定时任务下保持静默）
        """
        self.logger_name = logger_name
        self.log_level = log_level or os.getenv('LOG_LEVEL', 'WARNING')

        # 配置日志器
        self.logger = logging.getLogger(logger_name)
        self._configure_logger()

        # 执行统计
        self.execution_stats = {
            'start_time': None,
            'end_time': None,
            'archive_path': None,
            'state': None,
            'errors': []
        }

    def _configure_logger(self):
        """配置日志器"""
        level = getattr(logging, self.log_level.upper(), logging.WARNING)
        self.logger.setLevel(level)

        # 避免重复添加处理器
        if not self.logger.handlers:
            # 输出到stderr，stdout只保留状态消息
            handler = logging.StreamHandler()
            handler.setLevel(level)

            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            handler.setFormatter(formatter)

            self.logger.addHandler(handler)

        # 防止日志传播到根日志器
        self.logger.propagate = False

    def log_check_start(self, archive_path: str):
        """
        记录检查开始

        Args:
            archive_path: 归档路径
        """
        self.reset_stats()
        self.execution_stats['start_time'] = datetime.now(timezone.utc)
        self.execution_stats['archive_path'] = archive_path

        self.logger.info(f"开始证书过期检查: {archive_path}")

    def log_classification(self, archive_path: str, classification: ExpiryClassification):
        """
        记录分类结果

        Args:
            archive_path: 归档路径
            classification: 分类结果
        """
        self.execution_stats['state'] = classification.state.value

        details = (
            f"归档: {archive_path}, "
            f"过期时间: {classification.expiration_time.isoformat()}, "
            f"剩余秒数: {classification.seconds_to_expiration}, "
            f"剩余天数: {classification.days_remaining} 天"
        )

        if classification.is_expired:
            self.logger.warning(f"证书已过期 - {details}")
        elif classification.is_alert:
            self.logger.warning(f"证书即将过期 - {details}")
        else:
            self.logger.info(f"证书正常 - {details}")

    def log_error(self, archive_path: str, error: Exception):
        """
        记录错误信息

        Args:
            archive_path: 归档路径
            error: 异常对象
        """
        error_info = {
            'archive_path': archive_path,
            'error_type': type(error).__name__,
            'error_message': str(error),
            'timestamp': datetime.now(timezone.utc).isoformat()
        }

        self.execution_stats['errors'].append(error_info)

        message = f"归档 {archive_path} 检查时发生错误: {type(error).__name__}: {str(error)}"
        suggested_action = getattr(error, 'suggested_action', None)
        if suggested_action:
            message += f"，建议: {suggested_action}"
        self.logger.error(message)

        # 记录详细的堆栈跟踪（调试级别）
        self.logger.debug(f"归档 {archive_path} 错误堆栈跟踪:\n{traceback.format_exc()}")

    def log_check_end(self):
        """记录检查结束"""
        self.execution_stats['end_time'] = datetime.now(timezone.utc)

        self.logger.info(
            f"证书过期检查完成，耗时 {self._duration():.2f} 秒，"
            f"状态: {self.execution_stats['state'] or 'unknown'}"
        )
        self.logger.debug(f"执行摘要: {self.get_execution_summary()}")

    def log_notification_sent(self, notification_type: str, success: bool):
        """
        记录通知发送状态

        Args:
            notification_type: 通知类型（如 "SNS"）
            success: 是否发送成功
        """
        if success:
            self.logger.info(f"{notification_type} 告警发送成功")
        else:
            self.logger.error(f"{notification_type} 告警发送失败")

    def log_configuration_info(self, config: Dict[str, Any]):
        """
        记录配置信息

        Args:
            config: 配置信息字典
        """
        safe_config = self._sanitize_config(config)

        self.logger.debug("运行配置信息:")
        for key, value in safe_config.items():
            self.logger.debug(f"  {key}: {value}")

    def _sanitize_config(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        清理配置信息中的敏感数据

        Args:
            config: 原始配置

        Returns:
            Dict[str, Any]: 清理后的配置
        """
        sensitive_keys = {
            'passphrase', 'password', 'secret', 'token', 'credential', 'sns_topic_arn'
        }

        safe_config = {}
        for key, value in config.items():
            key_lower = key.lower()

            is_sensitive = (
                key_lower in sensitive_keys or
                key_lower == 'key' or
                key_lower.endswith('_key') or
                key_lower.endswith('_secret') or
                key_lower.endswith('_password') or
                key_lower.endswith('_passphrase') or
                key_lower.endswith('_token')
            )

            if is_sensitive and isinstance(value, str) and value:
                if 'arn:' in value:
                    # ARN类型，只显示前缀和后缀
                    parts = value.split(':')
                    if len(parts) >= 6:
                        safe_value = f"{':'.join(parts[:3])}:***:{parts[-2]}:{parts[-1]}"
                    else:
                        safe_value = "***"
                elif key_lower.endswith('passphrase') or key_lower.endswith('password'):
                    # 口令不泄露任何字符
                    safe_value = "***"
                else:
                    safe_value = value[:3] + "***" if len(value) > 3 else "***"
                safe_config[key] = safe_value
            else:
                safe_config[key] = value

        return safe_config

    def _duration(self) -> float:
        start = self.execution_stats['start_time']
        end = self.execution_stats['end_time']
        if start and end:
            return (end - start).total_seconds()
        return 0

    def get_execution_summary(self) -> Dict[str, Any]:
        """
        获取执行摘要

        Returns:
            Dict[str, Any]: 执行摘要信息
        """
        start = self.execution_stats['start_time']
        end = self.execution_stats['end_time']

        return {
            'start_time': start.isoformat() if start else None,
            'end_time': end.isoformat() if end else None,
            'duration_seconds': self._duration(),
            'archive_path': self.execution_stats['archive_path'],
            'state': self.execution_stats['state'],
            'error_count': len(self.execution_stats['errors']),
            'errors': self.execution_stats['errors']
        }

    def reset_stats(self):
        """重置执行统计"""
        self.execution_stats = {
            'start_time': None,
            'end_time': None,
            'archive_path': None,
            'state': None,
            'errors': []
        }
