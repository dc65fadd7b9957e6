from pathlib import Path

import pandas as pd
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

COLUMNS = ["room", "seatNo", "rollNo", "student", "department", "batch", "semester"]


def export_plan_excel(rows, file_path):
    df = pd.DataFrame(rows, columns=COLUMNS)
    df.to_excel(file_path, index=False)
    return Path(file_path)


def export_plan_pdf(rows, title, file_path):
    c = canvas.Canvas(str(file_path), pagesize=A4)
    width, height = A4

    def header(y):
        c.setFont("Helvetica-Bold", 14)
        c.drawString(50, y, title)
        y -= 30
        c.setFont("Helvetica", 10)
        c.drawString(50, y, "Room")
        c.drawString(120, y, "Seat")
        c.drawString(160, y, "Roll No")
        c.drawString(240, y, "Name")
        c.drawString(390, y, "Department")
        c.drawString(500, y, "Batch")
        y -= 15
        c.line(50, y, 550, y)
        return y - 15

    y = header(height - 50)

    for row in rows:
        if y < 60:
            c.showPage()
            y = header(height - 50)

        c.drawString(50, y, str(row["room"])[:12])
        c.drawString(120, y, str(row["seatNo"]))
        c.drawString(160, y, str(row["rollNo"])[:14])
        c.drawString(240, y, str(row["student"])[:26])
        c.drawString(390, y, str(row["department"] or "")[:18])
        c.drawString(500, y, str(row["batch"] or "")[:10])
        y -= 15

    c.save()
    return Path(file_path)
