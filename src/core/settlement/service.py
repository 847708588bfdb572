# src/core/settlement/service.py
"""
Расчёт по завершённому заказу.
Начисляет оценку водителю и вычисляет выплату: стандарт + бонус + чаевые.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.common.constants import MAX_RATING, MIN_RATING
from src.core.customers import CustomerRegistry
from src.core.drivers import DriverRegistry
from src.core.errors import DriverInactive, InvalidRating, require_unsigned
from src.shared.events import DomainEvent, OrderConfirmed, RatingUpdated


@dataclass
class Settlement:
    """Разбивка выплаты по подтверждённому заказу."""
    customer_id: str
    driver_id: str
    rating: int
    standard_payout: int
    bonus: int
    tip: int
    average_rating: int
    events: list[DomainEvent] = field(default_factory=list)

    @property
    def total_payout(self) -> int:
        return self.standard_payout + self.bonus + self.tip


class OrderSettlement:
    """
    Подтверждение заказа клиентом.

    Роль не требуется: заказ подтверждает сам клиент.
    """

    def __init__(self, drivers: DriverRegistry, customers: CustomerRegistry) -> None:
        self._drivers = drivers
        self._customers = customers

    def confirm_order_and_rate(
        self,
        caller: str,
        customer_id: str,
        driver_id: str,
        rating: int,
        tip: int,
    ) -> Settlement:
        """
        Подтверждает заказ и оценивает водителя.

        Порядок проверок:
        1. клиент зарегистрирован
        2. водитель зарегистрирован
        3. водитель активен
        4. оценка — целое в [1, 5]

        Сумма выплаты не накапливается в реестре, только публикуется.

        Raises:
            NotRegistered, DriverInactive, InvalidRating
        """
        self._customers.require(customer_id)
        driver = self._drivers.require(driver_id)
        if not driver.is_active:
            raise DriverInactive(f"Водитель {driver_id!r} не активен")
        if isinstance(rating, bool) or not isinstance(rating, int) or not MIN_RATING <= rating <= MAX_RATING:
            raise InvalidRating(f"Оценка должна быть от {MIN_RATING} до {MAX_RATING}, получено {rating!r}")
        require_unsigned(tip, "tip")

        driver.total_rating_points += rating
        driver.rating_count += 1

        settlement = Settlement(
            customer_id=customer_id,
            driver_id=driver_id,
            rating=rating,
            standard_payout=driver.standard_payout,
            bonus=driver.bonus,
            tip=tip,
            average_rating=driver.average_rating,
        )
        settlement.events = [
            OrderConfirmed(
                customer_id=customer_id,
                driver_id=driver_id,
                rating=rating,
                standard_payout=settlement.standard_payout,
                bonus=settlement.bonus,
                tip=tip,
                total_payout=settlement.total_payout,
            ),
            RatingUpdated(driver_id=driver_id, average_rating=settlement.average_rating),
        ]
        return settlement

    def get_average_rating(self, driver_id: str) -> int:
        """
        Средняя оценка x100, дробная часть отбрасывается.

        Raises:
            NotRegistered: водителя нет в реестре
        """
        return self._drivers.require(driver_id).average_rating
