"""Groupware package.

Feature modules (users, companies, events, attendance, worktime, ledger,
biometric, ...) each pair a thin Flask controller with service and
repository layers backed by MySQL.
"""
