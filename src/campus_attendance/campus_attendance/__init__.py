"""Campus Attendance package.

Organized by feature modules (students, faculty, subjects, timetable, imports, ...)
with a thin Flask controller layer over service/repository layers. The CSV import
pipeline lives in `imports`.
"""
