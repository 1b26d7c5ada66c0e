"""JSON blueprints exposing the password engine"""
