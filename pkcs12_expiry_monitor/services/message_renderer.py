"""
状态消息渲染服务
"""
import os
from datetime import datetime
from typing import List, Optional

from ..models import CheckResult, ExpiryClassification, UrgencyState

# 与 date(1) 默认输出一致，例如 "Sun Mar 10 23:00:00 EST 2024"
LOCAL_TIME_FORMAT = '%a %b %d %H:%M:%S %Z %Y'


class MessageRenderer:
    """状态消息渲染器"""

    def __init__(self, time_format: str = LOCAL_TIME_FORMAT):
        self.time_format = time_format

    def format_local_time(self, value: datetime) -> str:
        return value.strftime(self.time_format)

    def render(self, classification: ExpiryClassification, archive: str, quiet: bool = False) -> Optional[str]:
        """
        渲染状态消息

        Args:
            classification: 分类结果
            archive: 归档路径
            quiet: 静默模式，健康状态下不输出

        Returns:
            Optional[str]: 状态消息；静默模式下的健康状态返回None
        """
        localtime = self.format_local_time(classification.expiration_time)
        days = classification.days_remaining
        state = classification.state

        if state is UrgencyState.EXPIRED:
            return f"Certificate {archive} *EXPIRED* at {localtime}"
        if state is UrgencyState.EXPIRES_TODAY:
            return f"Certificate {archive} *EXPIRES TODAY* at {localtime}"
        if state is UrgencyState.EXPIRES_TOMORROW:
            return f"Certificate {archive} *EXPIRES TOMORROW* at {localtime}"
        if state is UrgencyState.EXPIRES_SOON:
            return f"Certificate {archive} *EXPIRES IN {days} DAYS* on {localtime}"
        if quiet:
            return None
        return f"Certificate {archive} does not expire for another {days} days on {localtime}"

    def format_subject(self, classification: ExpiryClassification, archive: str) -> str:
        """
        格式化告警主题（只含文件名）

        Args:
            classification: 分类结果
            archive: 归档路径

        Returns:
            str: 告警主题
        """
        state = classification.state
        name = os.path.basename(archive) or archive

        if state is UrgencyState.EXPIRED:
            return f"Certificate expired: {name}"
        if state is UrgencyState.EXPIRES_TODAY:
            return f"Certificate expires today: {name}"
        if state is UrgencyState.EXPIRES_TOMORROW:
            return f"Certificate expires tomorrow: {name}"
        if state is UrgencyState.EXPIRES_SOON:
            return f"Certificate expires in {classification.days_remaining} days: {name}"
        return f"Certificate healthy: {name}"

    def format_debug_lines(self, result: CheckResult, zone_description: str) -> List[str]:
        """
        格式化调试输出，展示中间计算结果

        Args:
            result: 检查结果
            zone_description: 本地时区描述

        Returns:
            List[str]: 调试信息行
        """
        classification = result.classification

        return [
            f"Time zone: {zone_description}",
            f"Expiration (UTC): {result.expiration_utc.isoformat()}",
            f"Expiration (local): {classification.expiration_time.isoformat()}",
            f"Now (local): {classification.now.isoformat()}",
            f"Seconds to expiration: {classification.seconds_to_expiration}",
            f"Midnight of expiration: {classification.midnight_expiration.isoformat()}",
            f"Midnight of today: {classification.midnight_now.isoformat()}",
            f"Days remaining: {classification.days_remaining}",
            f"State: {classification.state.value}",
        ]
