# API route constants shared by the controllers' tests

API_PREFIX = '/api'

# Movie
MOVIE_BASE = f'{API_PREFIX}/movie'

# Show
SHOW_BASE = f'{API_PREFIX}/show'
SHOW_GET = f'{SHOW_BASE}/{{show_id}}'
SHOW_SEATS = f'{SHOW_BASE}/{{show_id}}/seat'

# Booking
BOOKING_BASE = f'{API_PREFIX}/booking'
BOOKING_GET = f'{BOOKING_BASE}/{{booking_id}}'
BOOKING_CANCEL = f'{BOOKING_BASE}/{{booking_id}}'

# System
SYSTEM_SAVE = f'{API_PREFIX}/system/save'

# Common
HEALTH = '/health'
METRICS = '/metrics'
