"""
Configuration and constants for Sales Insights application
"""
import os

# App Settings
APP_TITLE = "Sales Insights"
APP_ICON = "📈"
APP_LAYOUT = "wide"

# Page Names
PAGE_PERFORMANCE_ANALYZER = "Performance Analyzer"
PAGE_SETTINGS = "Settings"

# Model Settings
GROQ_MODEL = "llama-3.3-70b-versatile"
DEFAULT_TEMPERATURE = 0.3
SUMMARY_MAX_TOKENS = 2000
SUMMARY_LANGUAGE = "Brazilian Portuguese"

# Environment Variable Names
ENV_API_KEY_PRIMARY = "GROQ_API_KEY"
ENV_API_KEY_2 = "GROQ_API_KEY_2"
ENV_API_KEY_3 = "GROQ_API_KEY_3"
MAX_API_KEYS = 5

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Session State Keys
SESSION_API_KEYS = "groq_api_keys"
SESSION_PERFORMANCE = "performance_session"
SESSION_SEEN_UPLOADS = "seen_upload_ids"
SESSION_CLEAR_CONFIRMATION = "show_clear_confirmation"

# Upload slots
SLOT_ATTENDANCE = "attendance"
SLOT_SALES = "sales"
SLOT_LABELS = {
    SLOT_ATTENDANCE: "Attendance (At./Pot. per hour)",
    SLOT_SALES: "Sales (PDV summary)",
}

# CSV dialect
CSV_DELIMITER = ";"
ATTENDANCE_MIN_LINES = 4
SALES_MIN_LINES = 2

# Attendance headers
SALESPERSON_HEADER_PREFIXES = ("vendedor", "salesperson")
METRIC_ATTENDANCES = "at."
METRIC_POTENTIALS = "pot."
HOUR_LABEL_PATTERN = r"(?<!\d)(\d{1,2})h"
TOTAL_LABEL = "total"

# Rows whose first cell is not a person
NON_PERSON_LABELS = {"total", "total geral", "vendedor", "vendedores", "vendedor(a)"}
NON_PERSON_PREFIXES = ("data",)

# Wrong-slot detection vocabularies
SALES_HEADER_KEYWORDS = ("vendedor", "vendas", "total vendas", "bilhete", "salesperson")
VENDOR_HEADER_KEYWORDS = ("vendedor", "salesperson", "vendor")

# Sales columns (0-based)
SALES_MIN_COLUMNS = 11
SALES_COL_SALESPERSON = 0
SALES_COL_COUNT = 2
SALES_COL_ITEMS_PER_SALE = 6
SALES_COL_REVENUE = 8
SALES_COL_AVERAGE_TICKET = 10

# Date handling
DATE_FORMATS = ("%d/%m/%Y", "%Y/%m/%d", "%d-%m-%Y", "%Y-%m-%d", "%d/%m/%y")
MIN_VALID_YEAR = 1970
DATE_LABEL_FORMAT = "%d/%m/%Y"
