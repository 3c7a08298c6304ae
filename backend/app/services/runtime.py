"""
服务运行时依赖：时钟、id 生成、写锁
服务通过构造参数注入，测试可替换为固定值
"""
import threading
import time
import uuid
from typing import Callable

Clock = Callable[[], int]
IdFactory = Callable[[], str]


def system_clock() -> int:
    """当前时间，Unix 纪元以来的纳秒数"""
    return time.time_ns()


def uuid_id() -> str:
    return str(uuid.uuid4())


# 房间 / 预订的所有写操作串行执行
booking_write_lock = threading.RLock()
