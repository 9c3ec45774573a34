"""Schema 包: 配置文件、请求体与上游外部契约的单入口校验/规范化."""
