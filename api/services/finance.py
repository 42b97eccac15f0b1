from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, List, Optional, Tuple

import pandas as pd
from pydantic import BaseModel

from reports import ReportRequest, Section
from api.config import (
    DOCTOR_PAYMENTS_CSV,
    SELLER_PAYMENTS_CSV,
    COMPANY_EXPENSES_CSV,
    APPOINTMENTS_CSV,
    DOCTOR_EXPENSES_CSV,
)

TIME_RANGE_LABELS = {
    "today": "Hoy",
    "week": "Esta Semana",
    "month": "Este Mes",
    "year": "Este Año",
    "all": "Global",
}

DOCTOR_PAYMENT_COLS = ["id", "doctor_id", "doctor_name", "date", "amount", "status"]
SELLER_PAYMENT_COLS = ["id", "seller_id", "seller_name", "payment_date", "period", "amount"]
COMPANY_EXPENSE_COLS = ["id", "date", "description", "amount", "category"]
APPOINTMENT_COLS = ["id", "doctor_id", "patient_name", "date", "total_price", "payment_status"]
DOCTOR_EXPENSE_COLS = ["id", "doctor_id", "date", "description", "amount"]


class FinanceStats(BaseModel):
    time_range: str
    label: str
    total_revenue: float
    commissions_paid: float
    total_expenses: float
    net_profit: float


class DoctorFinanceStats(BaseModel):
    doctor_id: str
    time_range: str
    label: str
    total_revenue: float
    total_expenses: float
    net_profit: float


def money(v: float) -> str:
    return f"${v:.2f}"


def _start_of_day(dt: datetime) -> datetime:
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def _end_of_day(dt: datetime) -> datetime:
    return dt.replace(hour=23, minute=59, second=59, microsecond=999999)


def time_range_bounds(time_range: str, now: datetime, week_to_date: bool = False) -> Optional[Tuple[datetime, datetime]]:
    """
    Inclusive [start, end] for a dashboard time range, or None for "all".
    Weeks start on Monday. With ``week_to_date`` the week ends today instead
    of on Sunday (the doctor dashboard counts the week that way).
    """
    if time_range not in TIME_RANGE_LABELS:
        raise ValueError(f"unknown time range: {time_range!r}")
    if time_range == "all":
        return None
    if time_range == "today":
        return _start_of_day(now), _end_of_day(now)
    if time_range == "week":
        start = _start_of_day(now - timedelta(days=now.weekday()))
        end = _end_of_day(now) if week_to_date else _end_of_day(start + timedelta(days=6))
        return start, end
    if time_range == "year":
        return _start_of_day(now.replace(month=1, day=1)), _end_of_day(now.replace(month=12, day=31))
    # month
    start = _start_of_day(now.replace(day=1))
    next_month = (start + timedelta(days=32)).replace(day=1)
    return start, _end_of_day(next_month - timedelta(days=1))


def _read_csv(path: Path, cols: List[str]) -> pd.DataFrame:
    if path.exists():
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
        for c in cols:
            if c not in df.columns:
                df[c] = ""
    else:
        df = pd.DataFrame(columns=cols)
    return df


def _prepare(df: pd.DataFrame, date_col: str, amount_col: str) -> pd.DataFrame:
    df = df.copy()
    df["parsed_date"] = pd.to_datetime(df[date_col], format="%Y-%m-%d", errors="coerce")
    df["parsed_amount"] = pd.to_numeric(df[amount_col], errors="coerce").fillna(0.0).astype(float)
    return df


def _in_range(df: pd.DataFrame, bounds: Optional[Tuple[datetime, datetime]]) -> pd.DataFrame:
    # rows without a usable date never match a range, and sort last in "all"
    if bounds is not None:
        start, end = bounds
        df = df[df["parsed_date"].notna() & (df["parsed_date"] >= start) & (df["parsed_date"] <= end)]
    return df.sort_values("parsed_date", ascending=False, kind="mergesort", na_position="last")


def _fmt_date(ts) -> str:
    return "" if pd.isna(ts) else ts.strftime("%Y-%m-%d")


@dataclass
class FinanceService:
    """File-backed finance data for the admin and doctor 'Finanzas' reports."""
    doctor_payments_csv: Path = DOCTOR_PAYMENTS_CSV
    seller_payments_csv: Path = SELLER_PAYMENTS_CSV
    company_expenses_csv: Path = COMPANY_EXPENSES_CSV
    appointments_csv: Path = APPOINTMENTS_CSV
    doctor_expenses_csv: Path = DOCTOR_EXPENSES_CSV
    clock: Callable[[], datetime] = field(default=datetime.now)

    # ---------- admin ----------
    def _admin_frames(self, time_range: str):
        bounds = time_range_bounds(time_range, self.clock())
        payments = _in_range(_prepare(_read_csv(self.doctor_payments_csv, DOCTOR_PAYMENT_COLS), "date", "amount"), bounds)
        paid = payments[payments["status"].str.strip() == "Paid"]
        sellers = _in_range(_prepare(_read_csv(self.seller_payments_csv, SELLER_PAYMENT_COLS), "payment_date", "amount"), bounds)
        expenses = _in_range(_prepare(_read_csv(self.company_expenses_csv, COMPANY_EXPENSE_COLS), "date", "amount"), bounds)
        return paid, sellers, expenses

    def admin_stats(self, time_range: str = "month") -> FinanceStats:
        return self._admin_stats(time_range, *self._admin_frames(time_range))

    @staticmethod
    def _admin_stats(time_range, paid, sellers, expenses) -> FinanceStats:
        revenue = float(paid["parsed_amount"].sum())
        commissions = float(sellers["parsed_amount"].sum())
        spent = float(expenses["parsed_amount"].sum())
        return FinanceStats(
            time_range=time_range,
            label=TIME_RANGE_LABELS[time_range],
            total_revenue=revenue,
            commissions_paid=commissions,
            total_expenses=spent,
            net_profit=revenue - commissions - spent,
        )

    def admin_report(self, time_range: str = "month") -> ReportRequest:
        paid, sellers, expenses = self._admin_frames(time_range)
        stats = self._admin_stats(time_range, paid, sellers, expenses)

        summary = Section(
            title="Resumen",
            columns=["Concepto", "Monto"],
            data=[
                ["Ingresos (Suscripciones)", money(stats.total_revenue)],
                ["Comisiones Pagadas", money(stats.commissions_paid)],
                ["Gastos Operativos", money(stats.total_expenses)],
                ["Beneficio Neto", money(stats.net_profit)],
            ],
        )
        income = Section(
            title="Ingresos por Suscripciones",
            columns=["Fecha", "Médico", "Monto"],
            data=[[_fmt_date(r.parsed_date), r.doctor_name or r.doctor_id, money(r.parsed_amount)]
                  for r in paid.itertuples(index=False)],
        )
        commissions = Section(
            title="Comisiones Pagadas",
            columns=["Fecha", "Vendedor", "Período", "Monto"],
            data=[[_fmt_date(r.parsed_date), r.seller_name or r.seller_id, r.period, money(r.parsed_amount)]
                  for r in sellers.itertuples(index=False)],
        )
        spent = Section(
            title="Gastos Operativos",
            columns=["Fecha", "Descripción", "Categoría", "Monto"],
            data=[[_fmt_date(r.parsed_date), r.description, r.category, money(r.parsed_amount)]
                  for r in expenses.itertuples(index=False)],
        )
        return ReportRequest(
            title="Reporte Financiero",
            subtitle=f"Periodo: {stats.label}",
            sections=[summary, income, commissions, spent],
            file_name=f"reporte-financiero-{time_range}.pdf",
        )

    # ---------- doctor ----------
    def _doctor_frames(self, doctor_id: str, time_range: str):
        bounds = time_range_bounds(time_range, self.clock(), week_to_date=True)
        appts = _prepare(_read_csv(self.appointments_csv, APPOINTMENT_COLS), "date", "total_price")
        appts = _in_range(appts[appts["doctor_id"] == doctor_id], bounds)
        paid = appts[appts["payment_status"].str.strip() == "Pagado"]
        expenses = _prepare(_read_csv(self.doctor_expenses_csv, DOCTOR_EXPENSE_COLS), "date", "amount")
        expenses = _in_range(expenses[expenses["doctor_id"] == doctor_id], bounds)
        return paid, expenses

    def doctor_stats(self, doctor_id: str, time_range: str = "month") -> DoctorFinanceStats:
        return self._doctor_stats(doctor_id, time_range, *self._doctor_frames(doctor_id, time_range))

    @staticmethod
    def _doctor_stats(doctor_id, time_range, paid, expenses) -> DoctorFinanceStats:
        revenue = float(paid["parsed_amount"].sum())
        spent = float(expenses["parsed_amount"].sum())
        return DoctorFinanceStats(
            doctor_id=doctor_id,
            time_range=time_range,
            label=TIME_RANGE_LABELS[time_range],
            total_revenue=revenue,
            total_expenses=spent,
            net_profit=revenue - spent,
        )

    def doctor_report(self, doctor_id: str, time_range: str = "month") -> ReportRequest:
        paid, expenses = self._doctor_frames(doctor_id, time_range)
        stats = self._doctor_stats(doctor_id, time_range, paid, expenses)
        return ReportRequest(
            title="Reporte Financiero del Consultorio",
            subtitle=f"Periodo: {stats.label}",
            sections=[
                Section(
                    title="Resumen",
                    columns=["Concepto", "Monto"],
                    data=[
                        ["Ingresos Totales", money(stats.total_revenue)],
                        ["Gastos", money(stats.total_expenses)],
                        ["Beneficio Neto", money(stats.net_profit)],
                    ],
                ),
                Section(
                    title="Citas Cobradas",
                    columns=["Fecha", "Paciente", "Monto"],
                    data=[[_fmt_date(r.parsed_date), r.patient_name, money(r.parsed_amount)]
                          for r in paid.itertuples(index=False)],
                ),
                Section(
                    title="Gastos",
                    columns=["Fecha", "Descripción", "Monto"],
                    data=[[_fmt_date(r.parsed_date), r.description, money(r.parsed_amount)]
                          for r in expenses.itertuples(index=False)],
                ),
            ],
            file_name=f"reporte-{doctor_id}-{time_range}.pdf",
        )
