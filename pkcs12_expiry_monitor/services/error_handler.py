"""
错误处理服务
"""
from typing import Any, Dict, List, Optional
from datetime import datetime, timezone
import logging


class MonitorError(Exception):
    """证书过期监控的基础异常"""


class ConfigurationError(MonitorError):
    """参数或配置错误"""

    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = list(errors)


class ExtractionError(MonitorError):
    """无法从归档中读取证书过期时间"""

    def __init__(self, archive_path: str, message: str):
        super().__init__(f"{archive_path}: {message}")
        self.archive_path = archive_path
        self.diagnostic = message
        self.suggested_action: Optional[str] = None


class TimeResolutionError(MonitorError):
    """无法解析本地时区，或时间不满足计算前提"""


class ExtractionErrorHandler:
    """证书提取错误处理器

    提取失败对本次运行是致命的，这里只负责归类、给出建议并记录日志，
    不做任何重试，重试交给外部调度器。
    """

    def __init__(self):
        """初始化提取错误处理器"""
        self.logger = logging.getLogger(__name__)

    def wrap(self, archive_path: str, error: Exception) -> ExtractionError:
        """
        将底层异常转换为 ExtractionError

        Args:
            archive_path: 归档路径
            error: 底层异常

        Returns:
            ExtractionError: 携带诊断信息的异常
        """
        if isinstance(error, ExtractionError):
            return error
        return ExtractionError(archive_path, self._describe(error))

    def handle_extraction_error(self, archive_path: str, error: Exception) -> Dict[str, Any]:
        """
        处理证书提取错误

        Args:
            archive_path: 归档路径
            error: 异常对象

        Returns:
            Dict[str, Any]: 错误处理结果
        """
        error_info = {
            'archive_path': archive_path,
            'error_type': type(error).__name__,
            'error_message': str(error),
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'suggested_action': self._get_suggested_action(error)
        }

        if isinstance(error, ExtractionError):
            error.suggested_action = error_info['suggested_action']

        # 错误本身由调用方记录并报告给用户，这里只补充处理建议
        self.logger.debug(
            f"归档 {archive_path} 证书提取失败: {error_info['error_message']}，"
            f"建议: {error_info['suggested_action']}"
        )

        return error_info

    def _describe(self, error: Exception) -> str:
        """
        生成面向用户的诊断文本

        Args:
            error: 异常对象

        Returns:
            str: 诊断文本
        """
        if isinstance(error, FileNotFoundError):
            return "archive not found"
        if isinstance(error, IsADirectoryError):
            return "archive path is a directory"
        if isinstance(error, PermissionError):
            return "permission denied reading archive"
        if isinstance(error, OSError):
            return f"cannot read archive: {error.strerror or error}"
        if isinstance(error, ValueError):
            # cryptography 对错误口令和损坏数据使用同一条消息
            return f"invalid passphrase or malformed archive ({error})"
        return f"{type(error).__name__}: {error}"

    def _get_suggested_action(self, error: Exception) -> str:
        """
        获取错误的建议处理方案

        Args:
            error: 异常对象

        Returns:
            str: 建议的处理方案
        """
        error_message = str(error).lower()

        if isinstance(error, ExtractionError):
            error_message = error.diagnostic.lower()

        if 'not found' in error_message or isinstance(error, FileNotFoundError):
            return "检查归档路径是否正确"
        elif 'permission' in error_message or isinstance(error, PermissionError):
            return "检查归档文件的读取权限"
        elif 'directory' in error_message:
            return "指定归档文件而不是目录"
        elif 'passphrase' in error_message or 'password' in error_message:
            return "确认口令正确，并检查归档是否为有效的PKCS#12文件"
        elif 'no certificate' in error_message:
            return "确认归档中包含证书而不仅是私钥"
        else:
            return "检查归档文件内容和格式"
