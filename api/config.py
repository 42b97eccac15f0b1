import os
from pathlib import Path
from dotenv import load_dotenv
load_dotenv()

APP_TITLE = "SUMA Reports API"

DATA_DIR = Path(os.getenv("SUMA_DATA_DIR", "data"))
REPORTS_DIR = Path(os.getenv("SUMA_REPORTS_DIR", "storage/reports"))

# Files used by the finance reports (exports of the dashboard collections)
DOCTOR_PAYMENTS_CSV = DATA_DIR / "doctor_payments.csv"     # subscription payments reported by doctors
SELLER_PAYMENTS_CSV = DATA_DIR / "seller_payments.csv"     # commissions paid to sellers
COMPANY_EXPENSES_CSV = DATA_DIR / "company_expenses.csv"   # admin operating expenses
APPOINTMENTS_CSV = DATA_DIR / "appointments.csv"           # doctor side: billed appointments
DOCTOR_EXPENSES_CSV = DATA_DIR / "doctor_expenses.csv"     # doctor side: practice expenses
