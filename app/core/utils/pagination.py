"""페이지네이션 유틸리티"""

from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

from app.core.exceptions import ValidationException

ItemT = TypeVar("ItemT")


@dataclass(frozen=True)
class PageSlice(Generic[ItemT]):
    """메모리 내 목록을 자른 결과

    Attributes:
        items: 현재 페이지 아이템
        total: 자르기 전 전체 아이템 수
        page: 현재 페이지 (1부터)
        size: 페이지 크기
        has_more: 다음 페이지 존재 여부
    """

    items: list[ItemT]
    total: int
    page: int
    size: int
    has_more: bool


def paginate(items: Sequence[ItemT], page: int, size: int) -> PageSlice[ItemT]:
    """이미 정렬된 목록에 오프셋 페이지네이션 적용

    Args:
        items: 정렬이 끝난 전체 목록
        page: 페이지 번호 (1 이상)
        size: 페이지 크기 (1 이상)

    Returns:
        PageSlice: items[(page-1)*size : page*size] 와 메타 정보

    Raises:
        ValidationException: page 또는 size가 1 미만인 경우
    """
    if page < 1 or size < 1:
        raise ValidationException(
            message="페이지 번호와 페이지 크기는 1 이상이어야 합니다.",
            detail={"page": page, "size": size},
        )

    total = len(items)
    start = (page - 1) * size
    end = start + size

    return PageSlice(
        items=list(items[start:end]),
        total=total,
        page=page,
        size=size,
        has_more=end < total,
    )
