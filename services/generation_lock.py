"""
services/generation_lock.py

- (성적 기간, 반) 범위별 배타 잠금
- 같은 범위를 동시에 "삭제 후 재생성"하면 결과가 섞이므로, 한 프로세스 안에서는 이 잠금으로 직렬화
- 프로세스 간 직렬화는 report_store.replace_reports 의 행 잠금(SELECT ... FOR UPDATE)이 담당
"""

import logging
import threading
from contextlib import contextmanager
from typing import Dict, Iterable, List, Tuple

from utils.exceptions import GenerationInProgress

logger = logging.getLogger(__name__)

Scope = Tuple[int, int]

_registry_lock = threading.Lock()
# 범위 → [잠금, 참조 수]. 보유/대기 중인 호출이 없으면 항목 삭제
_scope_locks: Dict[Scope, list] = {}


def _checkout(scope: Scope) -> threading.Lock:
    with _registry_lock:
        entry = _scope_locks.setdefault(scope, [threading.Lock(), 0])
        entry[1] += 1
        return entry[0]


def _checkin(scope: Scope):
    with _registry_lock:
        entry = _scope_locks[scope]
        entry[1] -= 1
        if entry[1] == 0:
            del _scope_locks[scope]


def active_scopes() -> List[Scope]:
    """현재 잠금을 보유하거나 기다리는 범위 목록"""
    with _registry_lock:
        return sorted(_scope_locks)


@contextmanager
def scope_lock(grading_id: int, class_ids: Iterable[int], wait: float = 0.0):
    """
    범위 잠금 획득 (정렬 순서로 획득해서 교착 방지)

    wait 초 안에 하나라도 못 잡으면 이미 잡은 잠금을 풀고 GenerationInProgress 발생
    """
    scopes = sorted({(grading_id, cid) for cid in class_ids})
    checked_out = []
    acquired = []
    try:
        for scope in scopes:
            lock = _checkout(scope)
            checked_out.append(scope)
            if not lock.acquire(timeout=max(wait, 0.0)):
                raise GenerationInProgress(
                    f"Report cards for grading {scope[0]}, class {scope[1]} are already being generated",
                    details={"grading_id": scope[0], "class_id": scope[1]},
                )
            acquired.append(lock)
        logger.debug(f"범위 잠금 획득: {scopes}")
        yield scopes
    finally:
        for lock in reversed(acquired):
            lock.release()
        for scope in checked_out:
            _checkin(scope)
