"""
Punchcard back office entry point.
"""
import os
import sys
import traceback

print("[Punchcard] ========================================")
print("[Punchcard] Starting Punchcard back office")
print("[Punchcard] ========================================")

config_name = os.getenv('FLASK_ENV', 'production')
print(f"[Punchcard] Config: {config_name}")
print(f"[Punchcard] PORT: {os.getenv('PORT', 'not set')}")
print(f"[Punchcard] DATABASE_URL: {'set' if os.getenv('DATABASE_URL') else 'NOT SET'}")

try:
    from punchcard import create_app
    app = create_app(config_name)
    print(f"[Punchcard] App created, {len(list(app.url_map.iter_rules()))} routes")
except Exception as e:
    print(f"[Punchcard] FATAL ERROR during app creation: {e}")
    traceback.print_exc()
    sys.exit(1)

if __name__ == '__main__':
    app.run(
        host='0.0.0.0',
        port=int(os.getenv('PORT', 5000)),
        debug=os.getenv('FLASK_ENV') == 'development'
    )
