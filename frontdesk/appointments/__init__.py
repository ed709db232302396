"""Appointment booking, including the doctor/date/slot conflict check."""
