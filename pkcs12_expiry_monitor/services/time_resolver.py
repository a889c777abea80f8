"""
本地时区解析服务
"""
from datetime import datetime, time, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import logging

from .error_handler import TimeResolutionError


class TimeResolver:
    """本地时区解析器

    未指定时区名称时使用主机配置的本地时区。每个日期的零点都根据
    该日期自身的时区规则单独换算成绝对时刻，夏令时切换日也不例外。
    """

    def __init__(self, timezone_name: Optional[str] = None, zone: Optional[tzinfo] = None):
        """
        初始化时区解析器

        Args:
            timezone_name: IANA时区名称，如 "America/New_York"；为None时使用主机本地时区
            zone: 直接指定的tzinfo对象，优先于timezone_name
        """
        self.logger = logging.getLogger(__name__)
        self.timezone_name = timezone_name
        self.zone = zone

        if self.zone is None and timezone_name:
            try:
                self.zone = ZoneInfo(timezone_name)
            except (ZoneInfoNotFoundError, ValueError) as e:
                raise TimeResolutionError(f"unknown time zone: {timezone_name}") from e

    def now(self) -> datetime:
        """获取当前本地时间"""
        return self.to_local(datetime.now().astimezone())

    def to_local(self, value: datetime) -> datetime:
        """
        转换为本地时间

        Args:
            value: 带时区信息的时间

        Returns:
            datetime: 本地时间
        """
        self._require_aware(value)
        try:
            if self.zone is not None:
                return value.astimezone(self.zone)
            return value.astimezone()
        except (OverflowError, OSError) as e:
            raise TimeResolutionError(f"cannot convert {value.isoformat()} to local time: {e}") from e

    def local_midnight(self, value: datetime) -> datetime:
        """
        计算本地日期零点对应的时刻

        Args:
            value: 带时区信息的时间

        Returns:
            datetime: 同一本地日期 00:00:00 的时刻
        """
        local_date = self.to_local(value).date()
        if self.zone is not None:
            return datetime.combine(local_date, time(0), tzinfo=self.zone)
        # 朴素时间的 astimezone() 按主机时区规则解析该日期的偏移量
        try:
            return datetime.combine(local_date, time(0)).astimezone()
        except (OverflowError, OSError) as e:
            raise TimeResolutionError(f"cannot resolve local midnight for {local_date}: {e}") from e

    def describe(self) -> str:
        """返回时区描述，用于日志和调试输出"""
        if self.timezone_name:
            return self.timezone_name
        if self.zone is not None:
            return str(self.zone)
        return "system local time"

    @staticmethod
    def _require_aware(value: datetime):
        if value.tzinfo is None or value.tzinfo.utcoffset(value) is None:
            raise TimeResolutionError(f"timestamp without time zone: {value.isoformat()}")
