"""Student records admin: students, their scanned documents and the admin pages"""
