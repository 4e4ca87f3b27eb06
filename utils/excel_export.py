"""
Excel Export Utilities
"""
import pandas as pd
from io import BytesIO


def convert_df_to_excel(df: pd.DataFrame, sheet_name: str = "Performance", hourly_df: pd.DataFrame = None) -> bytes:
    """
    Convert the consolidated performance table to Excel bytes for download.

    Args:
        df: Consolidated records as a DataFrame
        sheet_name: Name for the main sheet
        hourly_df: Optional hourly totals, written to a second "Hourly" sheet

    Returns:
        bytes: Excel file as bytes
    """
    output = BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name)
        if hourly_df is not None and not hourly_df.empty:
            hourly_df.to_excel(writer, sheet_name="Hourly")
    return output.getvalue()
