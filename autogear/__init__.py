"""AutoGear — 按对手攻击类型自动切换装备组并使用绑定药水。"""

__version__ = "0.1.0"
