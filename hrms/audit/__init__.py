"""
Audit trail for report template and generated report mutations.
"""
