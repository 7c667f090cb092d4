"""Tests for the charts module."""

from __future__ import annotations

from PIL import Image

from betblock.charts import savings_projection_chart, weekly_hours_chart
from betblock.models import WeeklyHours


class TestWeeklyHoursChart:
    def test_returns_image(self) -> None:
        img = weekly_hours_chart(WeeklyHours(week1=6, week2=4, week3=5, week4=3))
        assert isinstance(img, Image.Image)
        assert img.size[0] > 0 and img.size[1] > 0

    def test_all_zero(self) -> None:
        img = weekly_hours_chart(WeeklyHours(week1=0, week2=0, week3=0, week4=0))
        assert isinstance(img, Image.Image)

    def test_custom_size(self) -> None:
        img = weekly_hours_chart(
            WeeklyHours(week1=12, week2=10, week3=8, week4=20), size=(300, 200), dpi=50,
        )
        assert isinstance(img, Image.Image)

    def test_negative_hours(self) -> None:
        img = weekly_hours_chart(WeeklyHours(week1=1, week2=1, week3=1, week4=-1))
        assert isinstance(img, Image.Image)


class TestSavingsProjectionChart:
    def test_returns_image(self) -> None:
        img = savings_projection_chart(200, 4500)
        assert isinstance(img, Image.Image)
        assert img.size[0] > 0

    def test_short_projection(self) -> None:
        img = savings_projection_chart(500, 100_000, months=6)
        assert isinstance(img, Image.Image)
