"""공통 타입 및 열거형"""

from dataclasses import dataclass
from enum import IntEnum

# 빈 주택 / 무주택 가구 표시
NO_ID = -1


class DwellingType(IntEnum):
    SFD = 0           # 단독주택
    SFA = 1           # 연립 단독주택
    MF234 = 2         # 다세대 (2~4호)
    MF5PLUS = 3       # 공동주택 (5호 이상)
    MH = 4            # 이동식 주택


class Gender(IntEnum):
    MALE = 1
    FEMALE = 2


class Race(IntEnum):
    WHITE = 0
    BLACK = 1
    HISPANIC = 2
    OTHER = 3


class PersonRole(IntEnum):
    SINGLE = 0        # 미혼/단독
    MARRIED = 1       # 기혼 (가구주 또는 배우자)
    CHILD = 2         # 자녀


class Occupation(IntEnum):
    TODDLER = 0
    EMPLOYED = 1
    UNEMPLOYED = 2
    STUDENT = 3
    RETIREE = 4


class IncomeCategory(IntEnum):
    """연소득 구간 (상한값은 HouseholdConfig.income_brackets)"""
    LOW = 0
    MEDIUM_LOW = 1
    MEDIUM = 2
    MEDIUM_HIGH = 3
    HIGH = 4


class HouseholdSize(IntEnum):
    SIZE_1 = 0
    SIZE_2 = 1
    SIZE_3 = 2
    SIZE_4_PLUS = 3


@dataclass(frozen=True)
class HouseholdType:
    """선택모형 세분화 키 (가구원수 x 소득구간)"""
    size: HouseholdSize
    income: IncomeCategory

    @property
    def index(self) -> int:
        return int(self.size) * len(IncomeCategory) + int(self.income)


class MigrationKind(IntEnum):
    IN = 0
    OUT = 1
