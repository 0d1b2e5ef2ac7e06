"""사용자 위치 기반 거리 계산 및 정렬"""

import math
from dataclasses import dataclass
from typing import Sequence

from app.domains.recommendations.schemas import RecommendationItem

EARTH_RADIUS_KM = 6371


@dataclass(frozen=True)
class LocationPoint:
    """위경도 좌표"""

    latitude: float
    longitude: float


class LocationDistanceService:
    """Haversine 거리 계산 서비스"""

    def calculate_distance(self, a: LocationPoint, b: LocationPoint) -> float:
        """두 지점 사이의 거리 (km, 소수점 첫째 자리 반올림)

        Args:
            a: 출발점 (사용자 위치)
            b: 도착점 (콘텐츠 위치)

        Returns:
            float: 거리 (km)
        """
        d_lat = math.radians(b.latitude - a.latitude)
        d_lon = math.radians(b.longitude - a.longitude)

        h = (
            math.sin(d_lat / 2) ** 2
            + math.cos(math.radians(a.latitude))
            * math.cos(math.radians(b.latitude))
            * math.sin(d_lon / 2) ** 2
        )
        c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

        # round()는 짝수 반올림이므로 직접 반올림
        return math.floor(EARTH_RADIUS_KM * c * 10 + 0.5) / 10

    def add_distance_and_sort(
        self,
        items: Sequence[RecommendationItem],
        user_location: LocationPoint,
    ) -> list[RecommendationItem]:
        """각 항목에 거리를 채우고 가까운 순으로 정렬

        좌표가 없는 항목은 거리 inf로 맨 뒤에 놓이며,
        거리가 같으면 입력 순서를 유지합니다.
        """
        with_distance = []
        for item in items:
            if item.map_x is None or item.map_y is None:
                distance = math.inf
            else:
                distance = self.calculate_distance(
                    user_location,
                    LocationPoint(latitude=item.map_y, longitude=item.map_x),
                )
            with_distance.append(item.model_copy(update={"distance": distance}))

        return sorted(with_distance, key=lambda item: item.distance)

    def filter_by_radius(
        self,
        items: Sequence[RecommendationItem],
        radius_km: float,
    ) -> list[RecommendationItem]:
        """반경 이내(거리가 계산된) 항목만 남김"""
        return [
            item
            for item in items
            if item.distance is not None
            and math.isfinite(item.distance)
            and item.distance <= radius_km
        ]
