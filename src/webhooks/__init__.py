"""
WebHook receivers: handshake verification and signed notification intake.
"""
