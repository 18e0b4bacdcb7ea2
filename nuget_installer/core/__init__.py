"""核心领域层"""
