"""키워드-콘텐츠 연관성 판단"""

import re
from typing import Any, Mapping, Optional, Sequence, TypeVar

ContentT = TypeVar("ContentT")

_SEARCH_FIELDS = ("title", "description", "category")


def _field(content: Any, name: str) -> Optional[str]:
    if isinstance(content, Mapping):
        value = content.get(name)
    else:
        value = getattr(content, name, None)
    return value if isinstance(value, str) else None


class KeywordMatchingService:
    """콘텐츠에 등장하는 관심 키워드 찾기

    제목, 설명, 카테고리를 이어 붙인 소문자 텍스트에서 키워드를 찾습니다.
    기본은 부분 문자열 일치이며, exact=True면 단어 경계 일치를 사용합니다.

    Example::

        matcher = KeywordMatchingService()
        matcher.find_relevant_keywords({"title": "공룡 박물관"}, ["공룡", "로봇"])
        # ["공룡"]
    """

    def find_relevant_keywords(
        self,
        content: Any,
        keywords: Sequence[str],
        exact: bool = False,
    ) -> list[str]:
        """콘텐츠에 포함된 키워드 목록

        Args:
            content: title/description/category를 가진 dict 또는 객체
            keywords: 매칭할 키워드 목록
            exact: 단어 경계 일치 사용 여부

        Returns:
            입력 순서를 유지한, 중복 없는 매칭 키워드 목록
        """
        if not keywords:
            return []

        search_text = self._build_search_text(content)
        relevant: list[str] = []
        seen: set[str] = set()

        for keyword in keywords:
            normalized = keyword.lower().strip()
            if not normalized or normalized in seen:
                continue

            matched = (
                self.is_exact_match(search_text, keyword)
                if exact
                else normalized in search_text
            )
            if matched:
                seen.add(normalized)
                relevant.append(keyword)

        return relevant

    def calculate_match_score(
        self, content: Any, keywords: Sequence[str]
    ) -> float:
        """매칭된 키워드 비율 (0~1, 키워드가 없으면 0)"""
        if not keywords:
            return 0.0
        return len(self.find_relevant_keywords(content, keywords)) / len(keywords)

    def find_most_relevant_content(
        self,
        contents: Sequence[ContentT],
        keywords: Sequence[str],
    ) -> list[tuple[ContentT, list[str]]]:
        """콘텐츠별 매칭 키워드를 구하고 매칭 수 내림차순으로 정렬

        매칭 수가 같으면 입력 순서를 유지합니다.
        """
        annotated = [
            (content, self.find_relevant_keywords(content, keywords))
            for content in contents
        ]
        return sorted(annotated, key=lambda pair: len(pair[1]), reverse=True)

    def is_exact_match(self, text: str, keyword: str) -> bool:
        """단어 경계를 고려한 일치 여부 (대소문자 무시)"""
        normalized = keyword.lower().strip()
        if not normalized:
            return False
        pattern = rf"\b{re.escape(normalized)}\b"
        return re.search(pattern, text.lower()) is not None

    @staticmethod
    def _build_search_text(content: Any) -> str:
        parts = [_field(content, name) for name in _SEARCH_FIELDS]
        return " ".join(part for part in parts if part).lower()
