"""
服务接口定义
"""
from abc import ABC, abstractmethod
from datetime import datetime
from .models import ExpiryClassification


class CertificateSourceInterface(ABC):
    """证书来源接口"""

    @abstractmethod
    def extract_expiration(self, archive_path: str, passphrase: str) -> datetime:
        """读取归档中证书的过期时间（UTC）"""
        pass


class NotificationServiceInterface(ABC):
    """通知服务接口"""

    @abstractmethod
    def send_alert(self, subject: str, message: str) -> bool:
        """发送证书过期告警"""
        pass


class LoggerServiceInterface(ABC):
    """日志服务接口"""

    @abstractmethod
    def log_check_start(self, archive_path: str):
        """记录检查开始"""
        pass

    @abstractmethod
    def log_classification(self, archive_path: str, classification: ExpiryClassification):
        """记录分类结果"""
        pass

    @abstractmethod
    def log_error(self, archive_path: str, error: Exception):
        """记录错误信息"""
        pass
