"""会话启动脚本。"""
