"""CRM notification and reminder engine."""
