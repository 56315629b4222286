"""가구/인구 - 가구와 가구원 레코드 컨테이너

가구는 가구원을 소유하며, 한 사람은 동시에 한 가구에만 속한다.
"""

from dataclasses import dataclass, field

from ..core.types import Gender, Race, PersonRole, Occupation, NO_ID


@dataclass
class Person:
    """개인"""
    id: int
    age: int
    gender: Gender
    race: Race
    role: PersonRole
    occupation: Occupation = Occupation.UNEMPLOYED
    workplace: int = NO_ID
    income: float = 0.0           # 연소득
    household_id: int = NO_ID


@dataclass
class Household:
    """가구"""
    id: int
    dwelling_id: int = NO_ID      # -1 = 무주택
    person_ids: list[int] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.person_ids)


class Population:
    """가구/개인 관리자"""

    def __init__(self):
        self._households: dict[int, Household] = {}
        self._persons: dict[int, Person] = {}
        self.highest_household_id = 0
        self.highest_person_id = 0
        self._sealed = False
        self._issued_households: set[int] = set()
        self._issued_persons: set[int] = set()

    # === 가구 ===
    def add_household(self, hh: Household):
        if hh.id in self._households:
            raise ValueError(f"Household id {hh.id} already exists")
        if self._sealed and hh.id <= self.highest_household_id and hh.id not in self._issued_households:
            raise ValueError(f"Household id {hh.id} was already used in this run")
        self._issued_households.discard(hh.id)
        self._households[hh.id] = hh
        self.highest_household_id = max(self.highest_household_id, hh.id)

    def remove_household(self, household_id: int) -> Household | None:
        """가구와 가구원 모두 제거"""
        hh = self._households.pop(household_id, None)
        if hh is not None:
            for pid in hh.person_ids:
                self._persons.pop(pid, None)
        return hh

    def get_household(self, household_id: int) -> Household | None:
        return self._households.get(household_id)

    def households(self) -> list[Household]:
        return list(self._households.values())

    def next_household_id(self) -> int:
        self.highest_household_id += 1
        self._issued_households.add(self.highest_household_id)
        return self.highest_household_id

    @property
    def n_households(self) -> int:
        return len(self._households)

    # === 개인 ===
    def add_person(self, person: Person):
        if person.id in self._persons:
            raise ValueError(f"Person id {person.id} already exists")
        if self._sealed and person.id <= self.highest_person_id and person.id not in self._issued_persons:
            raise ValueError(f"Person id {person.id} was already used in this run")
        self._issued_persons.discard(person.id)
        self._persons[person.id] = person
        self.highest_person_id = max(self.highest_person_id, person.id)

    def add_person_to_household(self, person: Person, hh: Household):
        if person.household_id != NO_ID and person.household_id != hh.id:
            old = self._households.get(person.household_id)
            if old is not None and person.id in old.person_ids:
                old.person_ids.remove(person.id)
        person.household_id = hh.id
        if person.id not in hh.person_ids:
            hh.person_ids.append(person.id)

    def get_person(self, person_id: int) -> Person | None:
        return self._persons.get(person_id)

    def persons_of(self, hh: Household) -> list[Person]:
        return [self._persons[pid] for pid in hh.person_ids if pid in self._persons]

    def next_person_id(self) -> int:
        self.highest_person_id += 1
        self._issued_persons.add(self.highest_person_id)
        return self.highest_person_id

    def seal_ids(self):
        """초기 적재 종료: 이후 제거된 가구/개인 ID의 재등록 거부"""
        self._sealed = True

    @property
    def total_population(self) -> int:
        return len(self._persons)
