from .fixed_asset import DepreciationPlan, DepreciationRun, FixedAsset

__all__ = ["FixedAsset", "DepreciationPlan", "DepreciationRun"]
