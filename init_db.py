#!/usr/bin/env python
"""Database initialization script for the translation server.

This script creates the translations table and seeds it with the default
English and Vietnamese UI strings. Existing values are left untouched.

Usage:
    python init_db.py
"""

import os
import sys
from physicshub import create_app, db
from physicshub.services.translation import ensure_seeded


def init_database():
    """Create all tables and seed default translations."""
    
    config_name = os.getenv('FLASK_ENV', 'development')
    app = create_app(config_name)
    
    print(f"\n{'='*60}")
    print(f"Database Initialization for {config_name.upper()} Environment")
    print(f"{'='*60}\n")
    
    with app.app_context():
        try:
            print("Creating database tables...")
            print(f"Database URI: {app.config['SQLALCHEMY_DATABASE_URI']}\n")
            
            db.create_all()
            created = ensure_seeded()
            
            print(f"  ✓ {'translations':<25} - {created} default strings added")
            
            print(f"\n{'='*60}")
            print("✅ Database initialization complete!")
            print(f"{'='*60}\n")
            print("Next steps:")
            print("  1. Start the Flask server: python wsgi.py")
            print("  2. Fetch strings: GET /api/translations")
            print("\n")
            
            return True
            
        except Exception as e:
            print(f"❌ Error creating database: {e}\n")
            print(f"Traceback: {type(e).__name__}: {str(e)}")
            return False

if __name__ == '__main__':
    success = init_database()
    sys.exit(0 if success else 1)
