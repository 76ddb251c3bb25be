"""版本信息"""

__version__ = "0.1.0"
__author__ = "yafo-ai"
__description__ = "RBAC 授权树引擎：权限树、前端路由树与关联整体替换"
