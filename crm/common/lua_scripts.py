# KEYS[1] = window key
# ARGV = window_ms, limit, now_ms, member
# Returns {count_in_window, reset_ms, allowed}
LUA_SLIDING_WINDOW = """
local key = KEYS[1]
local window_ms = tonumber(ARGV[1])
local limit = tonumber(ARGV[2])
local now_ms = tonumber(ARGV[3])
local member = ARGV[4]

redis.call("ZREMRANGEBYSCORE", key, 0, now_ms - window_ms)

local current = redis.call("ZCARD", key)

local allowed = 0
if tonumber(current) < limit then
  redis.call("ZADD", key, now_ms, member)
  redis.call("PEXPIRE", key, window_ms)
  current = current + 1
  allowed = 1
end

local reset_ms = window_ms
local oldest = redis.call("ZRANGE", key, 0, 0, "WITHSCORES")
if oldest and #oldest >= 2 then
  reset_ms = (tonumber(oldest[2]) + window_ms) - now_ms
  if reset_ms < 0 then reset_ms = 0 end
end

return {current, reset_ms, allowed}
"""
