"""apifacade - httpx 之上的极简请求门面。

提供五个动词函数（get/post/put/patch/delete），把成功与失败统一转换为
{headers, status, message, body} 形式的响应信封。

模块结构：
- common: 日志系统、异常基类
- config: 客户端与请求配置
- envelope: 响应信封与结果分类
- facade: 请求门面（RequestFacade）
- shortcuts: 模块级默认门面与快捷函数
"""

from .common import ConfigError, FacadeError, NotInitializedError, setup_logging
from .config import ClientConfig, RequestConfig
from .envelope import Envelope, Outcome, build_envelope, classify
from .facade import RequestFacade
from .shortcuts import (
    NotInitialized,
    delete,
    get,
    get_facade,
    init,
    patch,
    post,
    put,
    shutdown,
)

__version__ = "0.1.0"
__all__ = [
    "ClientConfig",
    "ConfigError",
    "Envelope",
    "FacadeError",
    "NotInitialized",
    "NotInitializedError",
    "Outcome",
    "RequestConfig",
    "RequestFacade",
    "build_envelope",
    "classify",
    "delete",
    "get",
    "get_facade",
    "init",
    "patch",
    "post",
    "put",
    "setup_logging",
    "shutdown",
]
