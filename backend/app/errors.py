"""
业务异常定义
服务层抛出，路由层转换为 HTTP 响应
"""


class BookingError(ValueError):
    """业务异常基类"""

    status_code = 400


class NotFound(BookingError):
    """引用的 id 不存在"""

    status_code = 404


class Conflict(BookingError):
    """房间在请求的时间段内不可用"""

    status_code = 409


class AlreadyInitialized(BookingError):
    """房屋已初始化"""

    status_code = 409


class Unauthorized(BookingError):
    """非房东尝试执行房东专属操作"""

    status_code = 403
