# wealthsim/__init__.py
"""
Varlık takibi ve simülasyon işlemleri için masaüstü finans paneli.
"""

__version__ = "0.1.0"
