"""HCM attendance & payroll core.

Organized by feature modules (attendance, corrections, remote_work, payroll, ...)
with a thin Flask controller layer over service/repository layers.
"""
