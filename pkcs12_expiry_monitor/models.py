"""
数据模型定义
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class UrgencyState(Enum):
    """证书紧急程度"""
    EXPIRED = "expired"
    EXPIRES_TODAY = "expires_today"
    EXPIRES_TOMORROW = "expires_tomorrow"
    EXPIRES_SOON = "expires_soon"
    HEALTHY = "healthy"


@dataclass(frozen=True)
class ExpiryClassification:
    """单次过期检查的分类结果"""
    state: UrgencyState
    seconds_to_expiration: int
    days_remaining: int
    expiration_time: datetime
    now: datetime
    midnight_expiration: datetime
    midnight_now: datetime

    @property
    def is_alert(self) -> bool:
        """判断是否需要告警（除健康状态外均需告警）"""
        return self.state is not UrgencyState.HEALTHY

    @property
    def is_expired(self) -> bool:
        """判断是否已过期"""
        return self.state is UrgencyState.EXPIRED


@dataclass(frozen=True)
class MonitorConfig:
    """运行配置，由命令行参数解析一次性生成"""
    archive_path: str
    passphrase: str = field(repr=False)
    quiet: bool = False
    debug: bool = False
    sns_topic_arn: Optional[str] = None
    timezone_name: Optional[str] = None
    warning_days: int = 14


@dataclass
class CheckResult:
    """检查结果"""
    archive_path: str
    expiration_utc: datetime
    classification: ExpiryClassification
    message: Optional[str]
    notification_sent: bool = False
