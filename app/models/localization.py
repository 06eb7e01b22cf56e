"""
在地化對照表

列舉值（儲存於資料庫的標準值）與前端顯示的中文標籤之間的雙向轉換。
所有對照表皆為唯讀常數。
"""

from types import MappingProxyType
from typing import Mapping, Optional, Union, List, Type, TypeVar
from enum import Enum

from app.models.user import Gender, Region, EventType
from app.models.responses import OptionItem

E = TypeVar("E", bound=Enum)


class UnrecognizedValueError(ValueError):
    """無法對應到任何列舉值的輸入"""

    def __init__(self, value: str, accepted: List[str]):
        self.value = value
        self.accepted = accepted
        super().__init__(f"無法辨識的值: {value!r}")


GENDER_LABELS: Mapping[Gender, str] = MappingProxyType({
    Gender.MALE: "男",
    Gender.FEMALE: "女",
    Gender.OTHER: "其他",
})

REGION_LABELS: Mapping[Region, str] = MappingProxyType({
    Region.NORTH: "北部",
    Region.SOUTH: "南部",
    Region.EAST: "東部",
    Region.CENTRAL: "中部",
    Region.ISLANDS: "離島",
    Region.OVERSEAS: "海外",
})

EVENT_TYPE_LABELS: Mapping[EventType, str] = MappingProxyType({
    EventType.POP: "流行音樂",
    EventType.ROCK: "搖滾",
    EventType.ELECTRONIC: "電子音樂",
    EventType.HIP_HOP: "嘻哈/饒舌",
    EventType.JAZZ_BLUES: "爵士/藍調",
    EventType.CLASSICAL: "古典/交響樂",
    EventType.OTHER: "其他",
})

# 選項清單的英文副標籤，以標準鍵名索引
REGION_SUB_LABELS: Mapping[str, str] = MappingProxyType({
    "NORTH": "North",
    "SOUTH": "South",
    "EAST": "East",
    "CENTRAL": "Central",
    "ISLANDS": "Outlying Islands",
    "OVERSEAS": "Overseas",
})

EVENT_TYPE_SUB_LABELS: Mapping[str, str] = MappingProxyType({
    "POP": "Pop",
    "ROCK": "Rock",
    "ELECTRONIC": "Electronic",
    "HIP_HOP": "Hip-Hop/Rap",
    "JAZZ_BLUES": "Jazz/Blues",
    "CLASSICAL": "Classical/Symphony",
    "OTHER": "Other",
})


def _invert(labels: Mapping[E, str]) -> Mapping[str, E]:
    return MappingProxyType({label: member for member, label in labels.items()})


_LABEL_TO_GENDER = _invert(GENDER_LABELS)
_LABEL_TO_REGION = _invert(REGION_LABELS)
_LABEL_TO_EVENT_TYPE = _invert(EVENT_TYPE_LABELS)


def gender_to_label(value: Optional[Union[Gender, str]]) -> Optional[str]:
    """標準性別值轉為中文標籤，無法辨識時回傳 None"""
    if value is None:
        return None
    try:
        return GENDER_LABELS[Gender(value)]
    except ValueError:
        return None


def _parse(text: str, enum_cls: Type[E], label_map: Mapping[str, E]) -> E:
    # 先接受標準值，再查中文標籤
    try:
        return enum_cls(text)
    except ValueError:
        pass
    member = label_map.get(text)
    if member is None:
        raise UnrecognizedValueError(text, list(label_map.keys()))
    return member


def parse_gender(text: str) -> Gender:
    """標準值或中文標籤轉為 Gender"""
    return _parse(text, Gender, _LABEL_TO_GENDER)


def parse_region(text: str) -> Region:
    """標準值或中文標籤轉為 Region"""
    return _parse(text, Region, _LABEL_TO_REGION)


def parse_event_type(text: str) -> EventType:
    """標準值或中文標籤轉為 EventType"""
    return _parse(text, EventType, _LABEL_TO_EVENT_TYPE)


def build_options(labels: Mapping[E, str], sub_labels: Mapping[str, str]) -> List[OptionItem]:
    """依列舉宣告順序產生前端選項，找不到副標籤時以鍵名代替"""
    return [
        OptionItem(
            label=label,
            value=label,
            sub_label=sub_labels.get(member.name) or member.name,
        )
        for member, label in labels.items()
    ]


def region_options() -> List[OptionItem]:
    return build_options(REGION_LABELS, REGION_SUB_LABELS)


def event_type_options() -> List[OptionItem]:
    return build_options(EVENT_TYPE_LABELS, EVENT_TYPE_SUB_LABELS)
