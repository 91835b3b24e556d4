"""
Tank BOM calculators.

Input: a validated TankSpecification
Output: draft BOM dict (sections of line items, unpriced) consumed by PricingEngine
"""
