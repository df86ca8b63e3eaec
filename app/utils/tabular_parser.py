# app/utils/tabular_parser.py

from io import BytesIO
from typing import Any, Dict, List

import pandas as pd

from app.core.exceptions import ValidationException

EXCEL_SUFFIXES = (".xlsx", ".xls")
CSV_SUFFIXES = (".csv",)


def read_tabular_file(filename: str, content: bytes) -> List[Dict[str, Any]]:
    """
    Turn an uploaded spreadsheet or CSV into loosely-typed row dicts.

    Only the first sheet of a workbook is read. Header cells become keys
    as-is; empty cells come back as None.
    """
    suffix = (filename or "").lower()

    try:
        if suffix.endswith(EXCEL_SUFFIXES):
            df = pd.read_excel(BytesIO(content), sheet_name=0)
        elif suffix.endswith(CSV_SUFFIXES):
            df = pd.read_csv(BytesIO(content))
        else:
            raise ValidationException(
                "Unsupported file type. Upload an Excel (.xlsx, .xls) or CSV file."
            )
    except ValidationException:
        raise
    except Exception as exc:
        raise ValidationException(
            "Failed to parse file. Please ensure it's a valid Excel or CSV file.",
            details={"reason": str(exc)},
        )

    df = df.dropna(how="all")
    df = df.astype(object).where(pd.notna(df), None)
    return df.to_dict(orient="records")
