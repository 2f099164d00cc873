"""Questsmith: blueprint to S1API C# code generation"""
__version__ = "0.1.0"
