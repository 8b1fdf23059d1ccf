"""ltc commands"""
