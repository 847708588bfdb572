# tests/core/test_drivers_service.py
"""
Тесты для реестра водителей.
"""

from __future__ import annotations

import pytest

from src.core.drivers import DriverRecord, DriverRegistry
from src.core.errors import (
    AlreadyRegistered,
    InvalidArgument,
    InvalidZone,
    MustBeInactive,
    NotRegistered,
    Unauthorized,
)
from src.core.ledger import LedgerState
from src.core.zones import ZoneRateTable
from src.shared.events import (
    DriverDeRegistered,
    DriverRegistered,
    DriverStatusUpdated,
    DriverZoneUpdated,
    PayoutUpdated,
)


ADMIN = "driver-admin"
OWNER = "owner"


@pytest.fixture
def zone_1(zones: ZoneRateTable) -> int:
    """Зона 1 с тарифом 100."""
    zones.set_zone_rate(ADMIN, 1, 100)
    return 1


class TestDriverRecord:
    """Тесты для модели DriverRecord."""

    def test_average_rating_zero_without_ratings(self) -> None:
        record = DriverRecord(driver_id="d", driver_external_id="x", zone_id=1, standard_payout=10)

        assert record.average_rating == 0

    @pytest.mark.parametrize(
        ("points", "count", "expected"),
        [
            (4, 1, 400),
            (9, 2, 450),
            (137, 30, 456),  # 4.5666... -> 456, не 457
            (5, 3, 166),
        ],
    )
    def test_average_rating_truncates(self, points: int, count: int, expected: int) -> None:
        """Среднее x100 с отбрасыванием дробной части."""
        record = DriverRecord(
            driver_id="d",
            driver_external_id="x",
            zone_id=1,
            standard_payout=10,
            total_rating_points=points,
            rating_count=count,
        )

        assert record.average_rating == expected


class TestRegisterDriver:
    """Тесты для register_driver."""

    def test_creates_full_record(self, drivers: DriverRegistry, zone_1: int) -> None:
        """Новая запись активна, накопители нулевые, тариф снят с зоны."""
        events = drivers.register_driver(ADMIN, "D", "ext-D", zone_1)

        record = drivers.get("D")
        assert record is not None
        assert record.is_registered is True
        assert record.is_active is True
        assert record.total_rating_points == 0
        assert record.rating_count == 0
        assert record.bonus == 0
        assert record.standard_payout == 100
        assert record.zone_id == 1
        assert record.driver_external_id == "ext-D"

        assert len(events) == 1
        assert isinstance(events[0], DriverRegistered)
        assert events[0].standard_payout == 100

    def test_unset_zone_rejected(self, drivers: DriverRegistry, state: LedgerState) -> None:
        """Зона без тарифа — InvalidZone, запись не создаётся."""
        with pytest.raises(InvalidZone):
            drivers.register_driver(ADMIN, "D", "ext-D", 5)

        assert "D" not in state.drivers
        assert drivers.is_registered("D") is False

    def test_duplicate_rejected(self, drivers: DriverRegistry, zone_1: int) -> None:
        drivers.register_driver(ADMIN, "D", "ext-D", zone_1)

        with pytest.raises(AlreadyRegistered):
            drivers.register_driver(ADMIN, "D", "other", zone_1)

        assert drivers.get("D").driver_external_id == "ext-D"

    def test_already_registered_checked_before_zone(self, drivers: DriverRegistry, zone_1: int) -> None:
        """Порядок проверок: сначала дубль, потом зона."""
        drivers.register_driver(ADMIN, "D", "ext-D", zone_1)

        with pytest.raises(AlreadyRegistered):
            drivers.register_driver(ADMIN, "D", "ext-D", 42)

    def test_owner_cannot_register(self, drivers: DriverRegistry, zone_1: int) -> None:
        with pytest.raises(Unauthorized):
            drivers.register_driver(OWNER, "D", "ext-D", zone_1)

    def test_empty_identifier_rejected(self, drivers: DriverRegistry, zone_1: int) -> None:
        with pytest.raises(InvalidArgument):
            drivers.register_driver(ADMIN, "", "ext", zone_1)

    def test_payout_not_live_linked_to_zone(
        self,
        drivers: DriverRegistry,
        zones: ZoneRateTable,
        zone_1: int,
    ) -> None:
        """Изменение тарифа зоны не трогает уже зарегистрированных."""
        drivers.register_driver(ADMIN, "D", "ext-D", zone_1)
        zones.set_zone_rate(ADMIN, zone_1, 300)

        assert drivers.get("D").standard_payout == 100


class TestUpdateDriverStatus:
    """Тесты для update_driver_status."""

    def test_sets_flag_and_emits(self, drivers: DriverRegistry, zone_1: int) -> None:
        drivers.register_driver(ADMIN, "D", "ext-D", zone_1)

        events = drivers.update_driver_status(ADMIN, "D", False)

        assert drivers.get("D").is_active is False
        assert isinstance(events[0], DriverStatusUpdated)
        assert events[0].is_active is False

    def test_same_value_still_emits(self, drivers: DriverRegistry, zone_1: int) -> None:
        """Повтор того же значения допустим и тоже публикует событие."""
        drivers.register_driver(ADMIN, "D", "ext-D", zone_1)

        events = drivers.update_driver_status(ADMIN, "D", True)

        assert len(events) == 1
        assert drivers.get("D").is_active is True

    def test_unknown_driver(self, drivers: DriverRegistry) -> None:
        with pytest.raises(NotRegistered):
            drivers.update_driver_status(ADMIN, "ghost", False)


class TestDeRegisterDriver:
    """Тесты для de_register_driver."""

    def test_active_driver_cannot_be_removed(self, drivers: DriverRegistry, zone_1: int) -> None:
        drivers.register_driver(ADMIN, "D", "ext-D", zone_1)

        with pytest.raises(MustBeInactive):
            drivers.de_register_driver(ADMIN, "D")

        assert drivers.is_registered("D")

    def test_inactive_driver_removed(self, drivers: DriverRegistry, zone_1: int, state: LedgerState) -> None:
        drivers.register_driver(ADMIN, "D", "ext-D", zone_1)
        drivers.update_driver_status(ADMIN, "D", False)

        events = drivers.de_register_driver(ADMIN, "D")

        assert "D" not in state.drivers
        assert drivers.get("D") is None
        assert isinstance(events[0], DriverDeRegistered)

    def test_unknown_driver(self, drivers: DriverRegistry) -> None:
        with pytest.raises(NotRegistered):
            drivers.de_register_driver(ADMIN, "ghost")

    def test_reregistration_starts_from_zero(self, drivers: DriverRegistry, zone_1: int) -> None:
        """После удаления накопители и бонус начинаются с нуля."""
        drivers.register_driver(ADMIN, "D", "ext-D", zone_1)
        drivers.set_driver_bonus(ADMIN, "D", 20)
        record = drivers.get("D")
        record.total_rating_points = 9
        record.rating_count = 2
        drivers.update_driver_status(ADMIN, "D", False)
        drivers.de_register_driver(ADMIN, "D")

        drivers.register_driver(ADMIN, "D", "ext-D2", zone_1)

        fresh = drivers.get("D")
        assert fresh.total_rating_points == 0
        assert fresh.rating_count == 0
        assert fresh.bonus == 0
        assert fresh.is_active is True


class TestUpdateDriverZone:
    """Тесты для update_driver_zone."""

    def test_resnapshots_payout(self, drivers: DriverRegistry, zones: ZoneRateTable, zone_1: int) -> None:
        drivers.register_driver(ADMIN, "D", "ext-D", zone_1)
        zones.set_zone_rate(ADMIN, 2, 180)

        events = drivers.update_driver_zone(ADMIN, "D", 2)

        record = drivers.get("D")
        assert record.zone_id == 2
        assert record.standard_payout == 180
        assert isinstance(events[0], DriverZoneUpdated)
        assert events[0].standard_payout == 180

    def test_unset_zone_leaves_record(self, drivers: DriverRegistry, zone_1: int) -> None:
        drivers.register_driver(ADMIN, "D", "ext-D", zone_1)

        with pytest.raises(InvalidZone):
            drivers.update_driver_zone(ADMIN, "D", 9)

        record = drivers.get("D")
        assert record.zone_id == 1
        assert record.standard_payout == 100

    def test_not_registered_checked_before_zone(self, drivers: DriverRegistry) -> None:
        with pytest.raises(NotRegistered):
            drivers.update_driver_zone(ADMIN, "ghost", 9)


class TestSetDriverBonus:
    """Тесты для set_driver_bonus."""

    def test_overwrites_bonus(self, drivers: DriverRegistry, zone_1: int) -> None:
        drivers.register_driver(ADMIN, "D", "ext-D", zone_1)
        drivers.set_driver_bonus(ADMIN, "D", 20)

        events = drivers.set_driver_bonus(ADMIN, "D", 5)

        assert drivers.get("D").bonus == 5
        assert isinstance(events[0], PayoutUpdated)
        assert events[0].standard_payout == 100
        assert events[0].bonus == 5

    def test_unknown_driver(self, drivers: DriverRegistry) -> None:
        with pytest.raises(NotRegistered):
            drivers.set_driver_bonus(ADMIN, "ghost", 5)

    def test_negative_bonus_rejected(self, drivers: DriverRegistry, zone_1: int) -> None:
        drivers.register_driver(ADMIN, "D", "ext-D", zone_1)

        with pytest.raises(InvalidArgument):
            drivers.set_driver_bonus(ADMIN, "D", -1)

        assert drivers.get("D").bonus == 0
