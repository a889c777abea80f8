"""
证书过期分类服务
"""
import math
from datetime import datetime
from typing import Optional

from ..models import ExpiryClassification, UrgencyState
from .error_handler import TimeResolutionError
from .time_resolver import TimeResolver

SECONDS_PER_DAY = 86400


class ExpiryClassifier:
    """证书过期分类器"""

    def __init__(self, time_resolver: Optional[TimeResolver] = None, warning_days: int = 14):
        """
        初始化过期分类器

        Args:
            time_resolver: 本地时区解析器，默认使用主机本地时区
            warning_days: 提前警告天数，默认14天
        """
        self.time_resolver = time_resolver or TimeResolver()
        self.warning_days = warning_days

    def classify(self, expiration_time: datetime, now: datetime) -> ExpiryClassification:
        """
        对证书过期状态进行分类

        Args:
            expiration_time: 过期时间（本地时区）
            now: 当前时间（本地时区）

        Returns:
            ExpiryClassification: 分类结果

        Raises:
            TimeResolutionError: 时间缺少时区信息，或日期差与精确时间差矛盾
        """
        expiration_time = self.time_resolver.to_local(expiration_time)
        now = self.time_resolver.to_local(now)

        # 先截到整秒再相减，状态与上报的秒数基于同一个整数
        seconds_to_expiration = self._epoch_seconds(expiration_time) - self._epoch_seconds(now)
        midnight_expiration = self.time_resolver.local_midnight(expiration_time)
        midnight_now = self.time_resolver.local_midnight(now)
        days_remaining = self._days_between(midnight_now, midnight_expiration)

        if seconds_to_expiration <= 0:
            state = UrgencyState.EXPIRED
        elif days_remaining < 0:
            raise TimeResolutionError(
                f"expiration {expiration_time.isoformat()} is after {now.isoformat()} "
                f"but {abs(days_remaining)} calendar day(s) earlier"
            )
        elif days_remaining == 0:
            state = UrgencyState.EXPIRES_TODAY
        elif days_remaining == 1:
            state = UrgencyState.EXPIRES_TOMORROW
        elif days_remaining < self.warning_days:
            state = UrgencyState.EXPIRES_SOON
        else:
            state = UrgencyState.HEALTHY

        return ExpiryClassification(
            state=state,
            seconds_to_expiration=seconds_to_expiration,
            days_remaining=days_remaining,
            expiration_time=expiration_time,
            now=now,
            midnight_expiration=midnight_expiration,
            midnight_now=midnight_now
        )

    @staticmethod
    def _epoch_seconds(value: datetime) -> int:
        return math.floor(value.timestamp())

    @staticmethod
    def _days_between(start: datetime, end: datetime) -> int:
        # timestamp() 比较绝对时刻；同一 tzinfo 的 datetime 直接相减是按墙上时间计算的。
        # 跨夏令时切换时两个零点相差可能多或少一小时，按最接近的整天取整
        return round((end.timestamp() - start.timestamp()) / SECONDS_PER_DAY)
