"""基础设施层: 请求级上下文注入等与框架相关的横切关注点."""
