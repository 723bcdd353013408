import calendar
from datetime import date


def months_before(day: date, months: int) -> date:
    """Same day-of-month ``months`` earlier, clamped to the target month's length."""
    index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def is_future(flight_date: date, today: date) -> bool:
    return flight_date > today


def is_outside_window(flight_date: date, today: date, months: int) -> bool:
    return flight_date < months_before(today, months)


def needs_extended_processing(
    flight_date: date, today: date, extended_months: int, window_months: int
) -> bool:
    return (
        flight_date < months_before(today, extended_months)
        and not is_outside_window(flight_date, today, window_months)
    )
