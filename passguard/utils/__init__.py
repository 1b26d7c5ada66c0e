"""Pattern detection and digest helpers"""
