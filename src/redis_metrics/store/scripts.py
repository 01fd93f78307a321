"""Store – Lua scripts for "increment, expire on creation".

Both scripts compare the post-increment value with the amount: when they
match the increment created the key, and only then is EXPIRE issued. Later
increments never refresh the TTL.

INCRBY_EXPIRE   KEYS[1]=key  ARGV[1]=amount  ARGV[2]=ttl
ZINCRBY_EXPIRE  KEYS[1]=key  ARGV[1]=amount  ARGV[2]=member  ARGV[3]=ttl
"""

INCRBY_EXPIRE = """
local v = redis.call('INCRBY', KEYS[1], ARGV[1])
if tostring(v) == tostring(ARGV[1]) then
    redis.call('EXPIRE', KEYS[1], ARGV[2])
end
return v
"""

ZINCRBY_EXPIRE = """
local v = redis.call('ZINCRBY', KEYS[1], ARGV[1], ARGV[2])
if tostring(v) == tostring(ARGV[1]) then
    redis.call('EXPIRE', KEYS[1], ARGV[3])
end
return v
"""

__all__ = ["INCRBY_EXPIRE", "ZINCRBY_EXPIRE"]
