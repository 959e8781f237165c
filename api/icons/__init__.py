"""
Icon records: model, baseline/hosted-store reconciliation, persistence and
the `/icons` endpoints.
"""
