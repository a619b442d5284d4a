"""NaijaTax - Nigerian PAYE calculation service."""
