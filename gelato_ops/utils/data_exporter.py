import csv
import logging
from io import BytesIO, StringIO
from typing import Any, Dict, List, Sequence
import pandas as pd
from fastapi import HTTPException, status
from fastapi.responses import StreamingResponse
from openpyxl.styles import Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

logger = logging.getLogger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class DataExportService:
    """Writes row dicts as CSV or styled XLSX attachments"""

    def export_to_csv(self, data: List[Dict[str, Any]], columns: Sequence[str], filename: str) -> StreamingResponse:
        try:
            output = StringIO()
            writer = csv.DictWriter(output, fieldnames=list(columns))
            writer.writeheader()
            writer.writerows(data)
            output.seek(0)

            return StreamingResponse(
                iter([output.getvalue()]),
                media_type="text/csv",
                headers={"Content-Disposition": f"attachment; filename={filename}.csv"}
            )
        except Exception as e:
            logger.error(f"Error exporting to CSV: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to export data to CSV"
            )

    def export_to_excel(
        self,
        data: List[Dict[str, Any]],
        columns: Sequence[str],
        filename: str,
        sum_columns: Sequence[str] = (),
        sheet_name: str = "Inventory",
    ) -> StreamingResponse:
        """Header row styled, thin borders throughout, and a TOTAL row for ``sum_columns``"""
        try:
            output = BytesIO()
            df = pd.DataFrame(data, columns=list(columns))

            with pd.ExcelWriter(output, engine="openpyxl") as writer:
                df.to_excel(writer, sheet_name=sheet_name, index=False)
                worksheet = writer.sheets[sheet_name]

                header_font = Font(bold=True, color="FFFFFF")
                header_fill = PatternFill("solid", fgColor="366092")
                sum_font = Font(bold=True, size=12)
                sum_fill = PatternFill("solid", fgColor="D9D9D9")
                thin = Side(style="thin")
                border = Border(left=thin, right=thin, top=thin, bottom=thin)

                max_row = len(df) + 1
                max_col = len(df.columns)
                numeric_cols = {list(columns).index(name) + 1: name for name in sum_columns}

                for row in range(1, max_row + 1):
                    for col in range(1, max_col + 1):
                        cell = worksheet.cell(row=row, column=col)
                        cell.border = border
                        if row == 1:
                            cell.font = header_font
                            cell.fill = header_fill
                        elif col in numeric_cols:
                            cell.number_format = "#,##0.000"

                if numeric_cols and len(df):
                    sum_row = max_row + 2
                    for col in range(1, max_col + 1):
                        if col == 1:
                            value = "TOTAL"
                        elif col in numeric_cols:
                            value = float(df[numeric_cols[col]].sum())
                        else:
                            value = ""
                        cell = worksheet.cell(row=sum_row, column=col, value=value)
                        cell.font = sum_font
                        cell.fill = sum_fill
                        cell.border = border
                        if col in numeric_cols:
                            cell.number_format = "#,##0.000"

                for col in range(1, max_col + 1):
                    values = [str(c.value) for c in worksheet[get_column_letter(col)] if c.value is not None]
                    width = max((len(v) for v in values), default=0)
                    worksheet.column_dimensions[get_column_letter(col)].width = min(max(width + 2, 10), 50)

            output.seek(0)
            logger.info(f"Excel export {filename} written with {len(df)} rows")

            return StreamingResponse(
                BytesIO(output.read()),
                media_type=XLSX_MEDIA_TYPE,
                headers={"Content-Disposition": f"attachment; filename={filename}.xlsx"}
            )
        except Exception as e:
            logger.error(f"Error exporting to Excel: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to export data to Excel"
            )
