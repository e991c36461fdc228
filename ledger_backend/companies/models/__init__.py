from .company import Company, Outlet

__all__ = ["Company", "Outlet"]
