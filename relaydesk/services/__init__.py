"""服务层模块.

提供适配层的核心逻辑, 全部为同步纯函数或只读对象.

主要模块:
- providers: API 类型注册表、凭据校验、请求头构建
- upstream: 上游响应归一化(令牌列表/模型列表/签到)
- sites: 已知站点目录
"""
