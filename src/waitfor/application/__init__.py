"""Polling loop"""
