"""
证书过期监控主流程
"""
from datetime import datetime
from typing import Optional

from .interfaces import CertificateSourceInterface, NotificationServiceInterface
from .models import CheckResult, MonitorConfig
from .services.certificate_source import PKCS12CertificateSource
from .services.expiry_classifier import ExpiryClassifier
from .services.logger import LoggerService
from .services.message_renderer import MessageRenderer
from .services.sns_notification import SNSNotificationService
from .services.time_resolver import TimeResolver


class CertificateExpiryMonitor:
    """证书过期监控器主类"""

    def __init__(
        self,
        config: MonitorConfig,
        certificate_source: Optional[CertificateSourceInterface] = None,
        notification_service: Optional[NotificationServiceInterface] = None,
        logger_service: Optional[LoggerService] = None,
        time_resolver: Optional[TimeResolver] = None
    ):
        """
        初始化监控器

        Args:
            config: 运行配置
            certificate_source: 证书来源，默认读取PKCS#12归档
            notification_service: 告警服务，默认在配置了SNS主题时启用
            logger_service: 日志服务
            time_resolver: 本地时区解析器
        """
        self.config = config
        self.logger_service = logger_service or LoggerService()
        self.certificate_source = certificate_source or PKCS12CertificateSource()
        self.time_resolver = time_resolver or TimeResolver(config.timezone_name)
        self.classifier = ExpiryClassifier(self.time_resolver, warning_days=config.warning_days)
        self.renderer = MessageRenderer()

        self.notification_service = notification_service
        if self.notification_service is None and config.sns_topic_arn:
            self.notification_service = SNSNotificationService(topic_arn=config.sns_topic_arn)

        self._log_configuration()

    def _log_configuration(self):
        """记录运行配置信息"""
        config = {
            'archive_path': self.config.archive_path,
            'passphrase': self.config.passphrase,
            'quiet': self.config.quiet,
            'debug': self.config.debug,
            'sns_topic_arn': self.config.sns_topic_arn or '',
            'timezone': self.time_resolver.describe(),
            'warning_days': self.config.warning_days
        }

        get_status = getattr(self.notification_service, 'get_configuration_status', None)
        if get_status is not None:
            config['sns_configuration_valid'] = get_status()['configuration_valid']

        self.logger_service.log_configuration_info(config)

    def execute(self, now: Optional[datetime] = None) -> CheckResult:
        """
        执行证书过期检查

        Args:
            now: 当前时间，默认取主机当前时间

        Returns:
            CheckResult: 检查结果

        Raises:
            ExtractionError: 无法读取证书过期时间
            TimeResolutionError: 无法解析本地时间
        """
        archive_path = self.config.archive_path
        self.logger_service.log_check_start(archive_path)

        try:
            expiration_utc = self.certificate_source.extract_expiration(archive_path, self.config.passphrase)
            current = self.time_resolver.to_local(now) if now is not None else self.time_resolver.now()
            expiration_local = self.time_resolver.to_local(expiration_utc)
            classification = self.classifier.classify(expiration_local, current)
        except Exception as e:
            self.logger_service.log_error(archive_path, e)
            raise

        self.logger_service.log_classification(archive_path, classification)

        message = self.renderer.render(classification, archive_path, quiet=self.config.quiet)
        result = CheckResult(
            archive_path=archive_path,
            expiration_utc=expiration_utc,
            classification=classification,
            message=message
        )

        if classification.is_alert and self.notification_service is not None:
            result.notification_sent = self._send_alert(result)

        self.logger_service.log_check_end()
        return result

    def debug_lines(self, result: CheckResult):
        """获取调试模式下的中间计算结果"""
        return self.renderer.format_debug_lines(result, self.time_resolver.describe())

    def _send_alert(self, result: CheckResult) -> bool:
        """
        发送告警，失败只记录日志，不影响检查结果

        Args:
            result: 检查结果

        Returns:
            bool: 告警是否发送成功
        """
        subject = self.renderer.format_subject(result.classification, result.archive_path)
        sent = self.notification_service.send_alert(subject, result.message)
        self.logger_service.log_notification_sent("SNS", sent)
        return sent
