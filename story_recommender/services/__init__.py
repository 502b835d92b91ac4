"""
推荐服务模块
"""
