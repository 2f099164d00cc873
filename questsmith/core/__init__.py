"""Questsmith core: I/O-free blueprint model and code generation"""
